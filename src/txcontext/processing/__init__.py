"""
Extraction pipeline processors.

Each processor implements one phase of a run and is executed in order by
`txcontext.workflow.run_extraction`.
"""

from .base import Processor
from .extraction_processor import EntryExtractor, ExtractionProcessor, run_entries
from .filter_processor import FilterProcessor, compile_key_filter
from .load_processor import LoadProcessor
from .output_processor import OutputProcessor
from .writeback_processor import CodeWriteBackProcessor, WriteBackProcessor

__all__ = [
    "CodeWriteBackProcessor",
    "EntryExtractor",
    "ExtractionProcessor",
    "FilterProcessor",
    "LoadProcessor",
    "OutputProcessor",
    "Processor",
    "WriteBackProcessor",
    "compile_key_filter",
    "run_entries",
]
