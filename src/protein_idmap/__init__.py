"""Conversion of protein identifiers in proteomics tables to gene symbols.

Identifiers are resolved through BioMart (or any injected lookup callable),
one-to-many results are collapsed, and the converted values are merged back
as the first column of the table. Identifiers of shared peptides such as
``"2/P63261/P60709"`` are converted token by token.
"""

from protein_idmap.config import AnnotationConfig, load_config
from protein_idmap.core.exceptions import (
    ConfigurationError,
    MappingTableError,
    ProteinIdMapError,
    ServiceError,
)
from protein_idmap.pipeline import AnnotationResult, add_gene_symbols, annotate, convert_protein_ids
from protein_idmap.sources.biomart import MartConnection, load_mart

__version__ = "0.1.0"

__all__ = [
    "AnnotationConfig",
    "AnnotationResult",
    "ConfigurationError",
    "MappingTableError",
    "MartConnection",
    "ProteinIdMapError",
    "ServiceError",
    "__version__",
    "add_gene_symbols",
    "annotate",
    "convert_protein_ids",
    "load_config",
    "load_mart",
]
