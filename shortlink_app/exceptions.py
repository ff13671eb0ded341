"""
Exceptions raised by the shortlink core.

Lookup misses are not exceptions (the store returns None);
only conditions a caller must react to get a type here.
"""


class ShortlinkError(Exception):
    """Base class for shortlink errors"""


class ShortCodeCollisionError(ShortlinkError):
    """Two different URLs derived the same short code under the reject policy"""

    def __init__(self, short_code: str, existing_url: str, new_url: str):
        self.short_code = short_code
        self.existing_url = existing_url
        self.new_url = new_url
        super().__init__(
            f"Short code '{short_code}' already maps to '{existing_url}', "
            f"refusing to remap it to '{new_url}'"
        )
