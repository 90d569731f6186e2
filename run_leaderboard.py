"""
Run the investing challenge leaderboard

Usage:
    python run_leaderboard.py [--config settings.yaml] [--csv data] [--json]
"""
import sys
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from sheet_leaderboard.main import main

if __name__ == "__main__":
    sys.exit(main())
