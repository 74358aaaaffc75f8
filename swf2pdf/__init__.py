"""SWF (Flash) → PDF conversion package.

Renders the first frame of each input SWF with an external Flash player
and stacks the frames, one per page, into a single PDF document built
with pymupdf.  Pages take the stage size of their SWF (1 px = 1 pt).

Key features:
- Inputs from the command line and/or newline-delimited standard input
- Per-file error policy: fail, skip, or blank page
- Player subprocess output captured so only our own log lines are shown

Note: Imports are deferred to avoid requiring ``pymupdf`` at import time.
Use explicit imports from submodules (e.g., ``from swf2pdf.config import ...``)
or access via this package after ``pymupdf`` is installed.
"""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("swf2pdf")
except PackageNotFoundError:
    __version__ = "0.0.0"  # fallback for uninstalled dev usage


def __getattr__(name: str):
    """Lazy imports to avoid requiring pymupdf at package import time."""
    _lazy_imports = {
        # swf2pdf.config
        "Config": "swf2pdf.config",
        "ErrorMode": "swf2pdf.config",
        # swf2pdf.errors
        "ConversionAborted": "swf2pdf.errors",
        "InvalidUrlError": "swf2pdf.errors",
        "PlayerLoadError": "swf2pdf.errors",
        "Swf2PdfError": "swf2pdf.errors",
        # swf2pdf.inputs
        "InputEnumerator": "swf2pdf.inputs",
        # swf2pdf.player
        "ExporterPlayer": "swf2pdf.player",
        "SwfPlayer": "swf2pdf.player",
        # swf2pdf.renderer
        "PageRenderer": "swf2pdf.renderer",
        "RenderStats": "swf2pdf.renderer",
        "path_to_url": "swf2pdf.renderer",
    }

    if name in _lazy_imports:
        import importlib
        module = importlib.import_module(_lazy_imports[name])
        return getattr(module, name)

    raise AttributeError(f"module 'swf2pdf' has no attribute {name!r}")


__all__ = [
    "Config",
    "ConversionAborted",
    "ErrorMode",
    "ExporterPlayer",
    "InputEnumerator",
    "InvalidUrlError",
    "PageRenderer",
    "PlayerLoadError",
    "RenderStats",
    "Swf2PdfError",
    "SwfPlayer",
    "path_to_url",
]
