"""
Central registry for all schema classes and their mappings.
This provides a single source of truth for dataset-to-schema relationships.
"""

from schemas.route_segments import RouteSegments

# Dataset to Schema Class Mapping
DATASET_SCHEMA_MAPPING = {
    'route-segments': RouteSegments,
}

def get_schema_class(dataset: str):
    """
    Get the schema class for a dataset.

    Args:
        dataset: Dataset name (e.g., 'route-segments')

    Returns:
        Schema class or None if not found
    """
    return DATASET_SCHEMA_MAPPING.get(dataset)

# Export essential items
__all__ = [
    'DATASET_SCHEMA_MAPPING',
    'get_schema_class',
]
