"""
Schema Utilities
================

Utility functions for working with pandera schemas and route DataFrames.
"""

import importlib
from typing import Any, List

import pandas as pd
from shapely.geometry import LineString

from common.logging_utils import logger


def _get_schema_attribute(schema_class, attribute_name, default=None):
    """
    Get an attribute from the schema module.

    Args:
        schema_class: Pandera DataFrameModel class
        attribute_name: Name of the attribute to get
        default: Default value if attribute not found

    Returns:
        Attribute value or default
    """
    try:
        module = importlib.import_module(schema_class.__module__)
        if hasattr(module, attribute_name):
            return getattr(module, attribute_name)
    except ImportError:
        logger.warning(f"Could not import schema module {schema_class.__module__}")

    return default


def coerce_float_fields(df: pd.DataFrame, schema_class) -> pd.DataFrame:
    """
    Coerce float-typed schema columns with ``pd.to_numeric``.

    Columns built from text, such as constants broadcast from the journey
    record, may arrive as object dtype; values that do not parse become NaN.

    Args:
        df: Input DataFrame
        schema_class: Pandera DataFrameModel class

    Returns:
        DataFrame with float fields coerced
    """
    if df.empty:
        return df

    result_df = df.copy()
    schema_instance = schema_class.to_schema()

    coerced = []
    for col_name, col_schema in schema_instance.columns.items():
        if col_name not in result_df.columns:
            continue
        if not str(col_schema.dtype).startswith('float'):
            continue
        if pd.api.types.is_float_dtype(result_df[col_name]):
            continue
        result_df[col_name] = pd.to_numeric(result_df[col_name], errors='coerce').astype(float)
        coerced.append(col_name)

    if coerced:
        logger.debug(f"Coerced float columns: {coerced}")

    return result_df


def check_geometry_columns(df: pd.DataFrame, schema_class) -> List[str]:
    """
    Check that every COLS_GEOMETRY column holds one LineString per row.

    Args:
        df: DataFrame to check
        schema_class: Pandera DataFrameModel class with COLS_GEOMETRY attribute

    Returns:
        Names of the geometry columns checked

    Raises:
        ValueError: If a geometry value is not a LineString
    """
    geometry_columns = _get_schema_attribute(schema_class, 'COLS_GEOMETRY', [])
    checked = []

    for col in geometry_columns:
        if col not in df.columns:
            logger.debug(f"Geometry column '{col}' not found in DataFrame, skipping")
            continue

        bad = [i for i, geom in df[col].items() if not isinstance(geom, LineString)]
        if bad:
            raise ValueError(f"Column '{col}' has non-LineString values at rows {bad}")
        checked.append(col)

    return checked


def validate_route_table(df: pd.DataFrame, schema_class: Any) -> pd.DataFrame:
    """
    Coerce and validate a route table against a schema class.

    Args:
        df: Route table with one row per segment
        schema_class: Pandera DataFrameModel class

    Returns:
        Validated DataFrame, column order unchanged
    """
    if schema_class is None:
        raise ValueError("No schema class registered for route table validation")

    # 1. Coerce float fields that arrived as text
    df = coerce_float_fields(df, schema_class)

    # 2. Check geometry values
    checked = check_geometry_columns(df, schema_class)

    # 3. Final validation using Pandera
    df = schema_class.to_schema().validate(df)

    logger.debug(
        f"Validated {len(df)} rows against {schema_class.__name__} (geometry columns: {checked})"
    )
    return df
