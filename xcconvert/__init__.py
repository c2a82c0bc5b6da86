"""Convert Xcode projects into Swift package layouts."""

from .converter import ConversionReport, ConversionState, Converter
from .errors import ConversionError

__version__ = "0.1.0"

__all__ = ["ConversionError", "ConversionReport", "ConversionState", "Converter", "__version__"]
