from .cleaner import clean
from .segmenter import segment

__all__ = ["clean", "segment"]
__version__ = "0.1.0"
