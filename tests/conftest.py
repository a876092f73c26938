import os
import sys

# compiler.py and fluxel.py live at the repository root
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))
