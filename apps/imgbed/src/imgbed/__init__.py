"""Upload, list and delete images in a GitHub repository."""

from .config import ClientConfig
from .deleter import ImageDeleter
from .exceptions import ConfigError, ImgbedError, LocalFileNotFoundError
from .lister import ImageLister, Listing
from .naming import encode_file, format_size, generate_file_name
from .uploader import ImageUploader

__all__ = [
    "ClientConfig",
    "ImageUploader",
    "ImageLister",
    "ImageDeleter",
    "Listing",
    "ImgbedError",
    "ConfigError",
    "LocalFileNotFoundError",
    "encode_file",
    "format_size",
    "generate_file_name",
]
