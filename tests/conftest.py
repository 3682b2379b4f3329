from pathlib import Path
import sys

# Make the flat package importable without installing it
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))
