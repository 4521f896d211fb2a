"""Marine data source adapters."""

from surf_conditions.adapters.base import BaseAdapter
from surf_conditions.adapters.registry import get_adapter, has_credential

__all__ = ["BaseAdapter", "get_adapter", "has_credential"]
