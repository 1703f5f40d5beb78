"""Top-level package for the Offset Border toolkit.

Provides subpackages:
- offset_border.core – affine math, bounds and value types
- offset_border.border – border synthesis and placement
- offset_border.layout – page packing and photo orientation sizing
- offset_border.settings – persisted stroke settings and config messages
- offset_border.pipeline – chunked batch commands (apply / master / config)
- offset_border.document – in-memory scene document (host API)
- offset_border.output – PDF and raster previews of packed pages
"""

def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path

    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        try:
            content = pyproject.read_text()
            for line in content.splitlines():
                if line.strip().startswith("version"):
                    # Parse: version = "0.3.0"
                    return line.split("=")[1].strip().strip('"').strip("'")
        except Exception:
            pass

    # Fallback to importlib.metadata for installed package
    try:
        from importlib.metadata import version as pkg_version
        return pkg_version("offset-border-toolkit")
    except Exception:
        return "0.0.0"

__version__ = _get_version()
__all__: list[str] = ["__version__"]
