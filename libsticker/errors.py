class LibstickerError(Exception):
    "Base for all conversion failures"


class DecodeError(LibstickerError):
    "Source animation could not be read"


class EncodeError(LibstickerError):
    "Output animation could not be written"
