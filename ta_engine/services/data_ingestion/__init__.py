"""
Data Ingestion Service

Loads price series from local files for the indicator engine.
"""

from ta_engine.services.data_ingestion.loader import load_series

__all__ = ["load_series"]
