from sqlalchemy.orm import class_mapper

def sqlalchemy_to_dict(obj):
    """Convert a SQLAlchemy object to a dictionary."""
    if not obj:
        return None
    mapper = class_mapper(obj.__class__)
    result = {}
    for c in mapper.columns:
        value = getattr(obj, c.key)
        # Convert datetime objects to ISO format strings
        if hasattr(value, 'isoformat'):
            value = value.isoformat()
        # Convert Decimal objects to strings so cents are not lost
        elif hasattr(value, 'normalize') and hasattr(value, 'from_float'):  # Check if it's a Decimal
            value = str(value)
        # Convert enum types to strings
        elif hasattr(value, 'name'):  # Check if it's an enum
            value = value.name
        result[c.key] = value
    return result

__all__ = ['sqlalchemy_to_dict']
