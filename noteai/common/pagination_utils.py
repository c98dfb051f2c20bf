from math import ceil

from sqlalchemy.orm import Query

from noteai.schemas.pagination import PageMetaDto


class PaginationHelper:
    """Helper class for paginating note queries"""

    @staticmethod
    def clamp_page(page: int) -> int:
        """Pages start at 1; anything lower is treated as the first page."""
        try:
            page = int(page)
        except (TypeError, ValueError):
            return 1
        return max(page, 1)

    @staticmethod
    def create_meta(page: int, page_size: int, total_items: int) -> PageMetaDto:
        """
        Create pagination metadata

        Args:
            page: Current page number
            page_size: Items per page
            total_items: Total number of items

        Returns:
            PageMetaDto with calculated values
        """
        page_count = ceil(total_items / page_size) if page_size > 0 else 0

        return PageMetaDto(
            page=page,
            page_size=page_size,
            item_count=total_items,
            page_count=page_count,
            has_previous_page=page > 1,
            has_next_page=page < page_count,
        )

    @staticmethod
    def page_slice(query: Query, page: int, page_size: int) -> list:
        """Apply offset/limit for ``page`` to an already ordered query."""
        offset = (page - 1) * page_size
        return query.offset(offset).limit(page_size).all()
