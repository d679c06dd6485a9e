from sqlalchemy import or_

DEFAULT_PER_PAGE = 50

def apply_pagination_and_search(query, model, search_term, search_columns, page=1, per_page=DEFAULT_PER_PAGE):
    """
    Filters a roster query by a free-text term and paginates it.

    Args:
      query: base SQLAlchemy query, already ordered
      model: model class owning search_columns
      search_term: substring matched case-insensitively, ignored when empty
      search_columns: column names to match against (e.g. name, furigana)
      page: 1-based page number, anything below 1 becomes 1
      per_page: page size, anything below 1 becomes DEFAULT_PER_PAGE

    Returns:
      Flask-SQLAlchemy Pagination with .items, .total, .page, .pages
    """
    if search_term:
        query = query.filter(or_(*[
            getattr(model, col).ilike(f"%{search_term.strip()}%") for col in search_columns
        ]))

    page = page if page and page > 0 else 1
    per_page = per_page if per_page and per_page > 0 else DEFAULT_PER_PAGE

    return query.paginate(page=page, per_page=per_page, error_out=False)
