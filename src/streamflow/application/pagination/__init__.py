"""Application pagination – zero-based page primitives."""
from streamflow.application.pagination.page import MAX_PAGE_SIZE, Page, PageRequest

__all__ = ["MAX_PAGE_SIZE", "Page", "PageRequest"]
