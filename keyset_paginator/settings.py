from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator


class PaginatorSettings(BaseModel):
    """
    Page size policy shared by pagers and repositories.

    - default_page_size : used when the caller does not pass a size
    - max_page_size     : upper bound, regardless of what the caller asks for
    """

    model_config = ConfigDict(frozen=True)

    default_page_size: int | None = Field(default=None, ge=1)
    max_page_size: int | None = Field(default=None, ge=1)

    @model_validator(mode='after')
    def _default_within_max(self) -> PaginatorSettings:
        if (
            self.default_page_size is not None
            and self.max_page_size is not None
            and self.default_page_size > self.max_page_size
        ):
            raise ValueError('default_page_size must not exceed max_page_size.')
        return self

    def get_final_page_size(self, size: int | None) -> int:
        """
        < Resolve the page size to actually use >
        1. Fall back to default_page_size when size is None.
        2. Reject a missing or non-positive size.
        3. Clamp to max_page_size.

        Raises
        ------
        ValueError
            If no size is given and there is no default, or the size is < 1.
        """
        if size is None:
            size = self.default_page_size
        if size is None:
            raise ValueError('A page size is required: pass size or configure default_page_size.')
        if size < 1:
            raise ValueError('size must be >= 1.')
        if self.max_page_size is not None:
            size = min(size, self.max_page_size)
        return size


DEFAULT_SETTINGS = PaginatorSettings()
