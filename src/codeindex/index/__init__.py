"""Code index module — classification, extraction and import-graph analysis."""

from codeindex.index.call_graph import CallGraphBuilder
from codeindex.index.classifier import SourceClassifier
from codeindex.index.dependency_resolver import DependencyResolver
from codeindex.index.keyword_extractor import KeywordExtractor
from codeindex.index.schema import (
    AnalysisResult,
    AnalysisStats,
    CallGraphEntry,
    CodeIndexItem,
    ExportInfo,
    ImportInfo,
    ParsedFile,
    PropInfo,
    TableColumn,
)
from codeindex.index.sql_parser import SqlParser

__all__ = [
    "AnalysisResult",
    "AnalysisStats",
    "CallGraphBuilder",
    "CallGraphEntry",
    "CodeIndexItem",
    "DependencyResolver",
    "ExportInfo",
    "ImportInfo",
    "KeywordExtractor",
    "ParsedFile",
    "PropInfo",
    "SourceClassifier",
    "SqlParser",
    "TableColumn",
]
