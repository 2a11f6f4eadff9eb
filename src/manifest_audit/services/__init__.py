"""Services layer: load/reconcile/report 조합."""

from .compare import CompareService

__all__ = ["CompareService"]
