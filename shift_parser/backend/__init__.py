"""
Shift Schedule Extraction Backend.

A FastAPI service that sends PDF shift schedules to a remote LLM
completion endpoint and returns the extracted shifts as structured data.
"""

__version__ = "1.0.0"
