import os

project_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

__version__ = '0.1.0'
