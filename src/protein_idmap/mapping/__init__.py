"""Identifier extraction, resolution, collapsing and merging."""

from .assembler import assemble_output
from .collapser import collapse_mappings
from .extractor import extract_query_ids, require_column
from .identifiers import split_composite, strip_count_prefix
from .merger import MergeResult, UnresolvedReport, merge_annotations, resolve_composite
from .resolver import Lookup, MappingPair, resolve_mappings
from .schemas import mapping_table_schema, validate_mapping_table

__all__ = [
    "Lookup",
    "MappingPair",
    "MergeResult",
    "UnresolvedReport",
    "assemble_output",
    "collapse_mappings",
    "extract_query_ids",
    "mapping_table_schema",
    "merge_annotations",
    "require_column",
    "resolve_composite",
    "resolve_mappings",
    "split_composite",
    "strip_count_prefix",
    "validate_mapping_table",
]
