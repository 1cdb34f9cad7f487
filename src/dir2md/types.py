from os import PathLike
from typing import NamedTuple, Union

# Complete path type including strings and any path-like object
PathType = Union[str, PathLike[str]]


class ContentFile(NamedTuple):
    """A file whose contents belong in the generated document.

    Attributes:
        path: Absolute path used to read the file.
        relative_path: Forward-slash path relative to the scan root, used for display.
    """

    path: str
    relative_path: str
