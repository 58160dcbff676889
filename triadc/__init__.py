"""
triadc - translates an assignment statement into triads and rebuilds
its expression tree.
"""

from .compiler import translate, translate_source, translate_file, TranslationError
from .parser import Parser, parse

__version__ = "0.1.0"
