"""ALFReD: a conversational advisor that answers federal policy questions by
dispatching model-selected tool calls to the Federal Register, FRED and
Google Custom Search APIs and streaming the outcome back to the caller.
"""

__version__ = "0.1.0"
