"""
ta-engine Services

Service layer wrapping the indicator engine.
Each service has a defined interface (contract) and implementation.
"""

from ta_engine.services.base import BaseService

__all__ = ["BaseService"]
