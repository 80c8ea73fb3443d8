"""
Pagination utilities for the Coupon API.

List endpoints return a bare envelope (``{"coupons": [...]}``) and carry the
pagination metadata in response headers instead of the body.
"""

from rest_framework.utils.urls import remove_query_param, replace_query_param

TOTAL_COUNT_HEADER = "X-Total-Count"
TOTAL_PAGES_HEADER = "X-Total-Pages"


def build_link_header(request, page, total_pages):
    """
    Build an RFC 5988 ``Link`` header value for a page-numbered listing.

    Args:
        request: The DRF request being answered
        page (int): Current 1-indexed page
        total_pages (int): Number of pages available

    Returns:
        str: Header value, empty when there is nothing to link to
    """
    url = request.build_absolute_uri()
    links = []

    def page_url(number):
        if number == 1:
            return remove_query_param(url, "page")
        return replace_query_param(url, "page", number)

    if page > 1:
        links.append(f'<{page_url(1)}>; rel="first"')
        links.append(f'<{page_url(min(page - 1, max(total_pages, 1)))}>; rel="prev"')
    if page < total_pages:
        links.append(f'<{page_url(page + 1)}>; rel="next"')
        links.append(f'<{page_url(total_pages)}>; rel="last"')

    return ", ".join(links)


def add_pagination_headers(response, request, total, total_pages, page):
    """
    Attach total count, total pages and navigation links to a list response.

    Args:
        response: The response to decorate
        request: The DRF request being answered
        total (int): Total number of matching records
        total_pages (int): Number of pages available
        page (int): Current 1-indexed page

    Returns:
        Response: The same response, for chaining
    """
    response[TOTAL_COUNT_HEADER] = str(total)
    response[TOTAL_PAGES_HEADER] = str(total_pages)

    link = build_link_header(request, page, total_pages)
    if link:
        response["Link"] = link

    return response
