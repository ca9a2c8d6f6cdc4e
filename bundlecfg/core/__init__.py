from __future__ import annotations

from bundlecfg.core.logging import manifest_scope, setup_logging

__all__ = ["manifest_scope", "setup_logging"]
