"""Service layer — publishing logic returning ServiceResult.

Services may import from config and transfer layers.
They must never import from commands or output.
"""
