from flask import request, current_app


def _int_arg(name, default):
    try:
        return int(request.args.get(name, default))
    except (ValueError, TypeError):
        return default


def get_pagination_params():
    page = max(1, _int_arg('page', current_app.config.get('DEFAULT_PAGE', 1)))
    default_per_page = current_app.config.get('DEFAULT_PER_PAGE', 20)
    per_page = max(1, min(_int_arg('per_page', default_per_page), current_app.config.get('MAX_PER_PAGE', 100)))
    return page, per_page


def paginate_query(query, page, per_page):
    """Run ``query`` for one page. Returns (items, meta)."""
    pagination = query.paginate(page=page, per_page=per_page, error_out=False)
    return pagination.items, {
        'page': pagination.page,
        'per_page': pagination.per_page,
        'total': pagination.total,
        'total_pages': pagination.pages,
        'has_next': pagination.has_next,
        'has_prev': pagination.has_prev,
    }
