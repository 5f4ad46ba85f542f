from typing import List, Tuple

from sqlalchemy.orm import Query


def paginate(query: Query, page: int, size: int) -> Tuple[List, int]:
    """Return one 1-indexed page of an ordered query plus the unpaged total."""
    total = query.order_by(None).count()
    items = query.offset((page - 1) * size).limit(size).all()
    return items, total
