from .insight import (
    AnalyzeResponse,
    FileCreate,
    FileRead,
    InsightRead,
    InsightWithFile,
    StructuredSummary,
)

__all__ = [
    "AnalyzeResponse",
    "FileCreate",
    "FileRead",
    "InsightRead",
    "InsightWithFile",
    "StructuredSummary",
]
