from .paged_data_viewmodel import PagedDataViewModel  # noqa: F401
