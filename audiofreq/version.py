__version__ = "1.0.0"
__full_name__ = f"AudioFreq v{__version__} - Offline Audio Frequency Analysis"
