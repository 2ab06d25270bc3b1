"""bufrng launcher.

Defines the project ROOT (the directory containing run.py), makes the
package importable without installation and hands the command line to
bufrng.entry. Settings are read from config/config.json and the optional
config/config_user.json next to this script.

Usage:
  python run.py sample --profile fast --seed 42 --kind gaussian --count 5
  python run.py bench --profile secure --draws 2000000
  python run.py check --buckets 5 128 65536
"""


from __future__ import annotations
import sys
from pathlib import Path

# Define project root as the directory containing this script
ROOT = Path(__file__).resolve().parent

# Add the project root to sys.path so modules can be imported
if str(ROOT) not in sys.path:
	sys.path.insert(0, str(ROOT))

from bufrng.entry import main


if __name__ == "__main__":
	sys.exit(main())
