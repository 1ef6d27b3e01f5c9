"""Transformers for converting archive entries to catalog records.

This package contains the transformer interface and the block-state
transformer used by the ingestion pipeline.
"""

from .base import Transformer
from .blockstate import BlockStateTransformer

__all__ = ["Transformer", "BlockStateTransformer"]
