from django.conf import settings
from rest_framework.pagination import PageNumberPagination


class StandardPagination(PageNumberPagination):
    page_size = settings.OFFER_DEFAULT_PAGE_SIZE
    page_size_query_param = "size"
    max_page_size = 100
