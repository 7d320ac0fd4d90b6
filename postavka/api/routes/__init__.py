# API routes
from postavka.api.routes import barcodes, health, orders

__all__ = ["barcodes", "health", "orders"]
