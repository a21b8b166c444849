"""Import helpers for scripts that aren't packages."""
import importlib.util
import sys
from pathlib import Path

ROOT = Path(__file__).parent.parent
SCRIPTS_DIR = ROOT / "scripts"

# Make mrglue importable without an install.
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


def _import_script(name: str, filename: str):
    """Import a script file as a module using importlib."""
    spec = importlib.util.spec_from_file_location(name, SCRIPTS_DIR / filename)
    mod = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(mod)
    return mod


annotate_diff_cli = _import_script("annotate_diff_cli", "annotate-diff.py")
render_adf_cli = _import_script("render_adf_cli", "render-adf.py")
extract_suggestions_cli = _import_script("extract_suggestions_cli", "extract-suggestions.py")
render_mr_description_cli = _import_script("render_mr_description_cli", "render-mr-description.py")
