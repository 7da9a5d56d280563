"""hookclip - viral moment analysis and clip job service."""

__version__ = "0.1.0"
