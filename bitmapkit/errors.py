"""
Exception classes shared by the buffer, codec and text subsystems.
"""


class BitmapError(Exception):
    """Base class for all bitmapkit errors."""
    pass


class InvalidArgument(BitmapError, ValueError):
    """A caller-supplied parameter is outside its valid domain."""
    def __init__(self, name, value, message=""):
        self.name = name
        self.value = value
        self.message = message or f"Invalid {name}: {value!r}"
        super().__init__(self.message)


class MalformedBitmap(BitmapError):
    """Bitmap file data failed structural validation"""
    pass


class IncompatibleFormat(BitmapError):
    """Source and destination bitmaps use different bytes per pixel"""
    def __init__(self, expected, actual):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Bytes per pixel don't match: destination has {expected}, source has {actual}")


class MalformedFont(BitmapError):
    """Font description or glyph sheet can't be used"""
    pass
