from __future__ import annotations

import builtins
import logging
import warnings
from typing import Annotated, Any, Generic, cast, get_args

from sqlalchemy.engine import ScalarResult
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import DeclarativeBase
from typing_extensions import Doc

from keyset_paginator.enums import PaginationMode
from keyset_paginator.query.list_query import ListQuery
from keyset_paginator.query.paginate import fix_orientation, paginate
from keyset_paginator.repo_types import QueryOrStmt, TModel
from keyset_paginator.session_provider import SessionProvider
from keyset_paginator.settings import DEFAULT_SETTINGS, PaginatorSettings

logger = logging.getLogger(__name__)


class KeysetRepository(Generic[TModel]):
    """
    Async, single-model repository that serves keyset pages.

    Principles
    ----------
    - **Single-model oriented design**: `model` is inferred from the generic argument
      (`KeysetRepository[Reply]`) unless the subclass declares it explicitly.
    - **Execution is delegated**: pages are built by `paginate()` and executed on an
      AsyncSession; engine errors propagate unchanged.
    - **Declared order out**: BEFORE pages are reversed back into the query's order
      before they are returned.
    """

    _session_provider: SessionProvider | None = None

    model: Annotated[
        type[TModel],
        Doc(
            'Target SQLAlchemy ORM model class. Usually inferred from the generic type argument, '
            'but can be explicitly declared in the subclass.'
        ),
    ]
    settings: Annotated[
        PaginatorSettings,
        Doc('Page size policy (default / max page size) for this repository.'),
    ] = DEFAULT_SETTINGS

    def __init_subclass__(cls, **kwargs: Any) -> None:
        """
        Infer `model` from the first generic argument (e.g. KeysetRepository[Reply])
        when the subclass does not declare it.
        """
        super().__init_subclass__(**kwargs)

        if hasattr(cls, 'model'):
            return

        for base in getattr(cls, '__orig_bases__', []):
            args = get_args(base)
            if args and isinstance(args[0], type) and issubclass(args[0], DeclarativeBase):
                cls.model = cast(type[TModel], args[0])
                return

    def __init__(
        self,
        session: Annotated[
            AsyncSession | None,
            Doc('AsyncSession to bind initially. If None, a SessionProvider must be configured.'),
        ] = None,
        *,
        settings: Annotated[
            PaginatorSettings | None,
            Doc('Instance-level page size policy. If None, use the class default.'),
        ] = None,
    ):
        if not hasattr(self, 'model'):
            raise TypeError(f'{type(self).__name__} has no model. Use KeysetRepository[Model] or set `model`.')

        self._specific_session = session
        if settings is not None:
            self.settings = settings

        if session is not None and self._session_provider is not None:
            warnings.warn(
                f'[{type(self).__name__}] A session was passed to __init__ '
                'while a SessionProvider is configured. Pages will use the provider session; '
                'the session passed here is ignored.',
                stacklevel=2,
            )

    @classmethod
    def configure_session_provider(cls, provider: SessionProvider) -> None:
        cls._session_provider = provider

    @property
    def session(self) -> AsyncSession:
        if self._session_provider is None:
            if self._specific_session is None:
                raise RuntimeError(f'{type(self).__name__} has no session: pass one to __init__ or configure a SessionProvider.')
            return self._specific_session

        return self._session_provider.get_session()

    def _resolve_session(self, session: AsyncSession | None) -> AsyncSession:
        return session if session is not None else self.session

    def list(self) -> Annotated[ListQuery[TModel], Doc('ListQuery DSL entrypoint (where/order_by/options).')]:
        """
        Create a `ListQuery` for this repository's model.

        Example
        -------
        >>> q = repo.list().where(Reply.likes_count > 0).order_by([Reply.id.asc()])
        >>> rows = await repo.after(q, 120, size=20)
        """
        return ListQuery[TModel](self.model)

    async def page(
        self,
        query: Annotated[QueryOrStmt, Doc('Ordered ListQuery or SQLAlchemy Select.')],
        cursor: Annotated[Any, Doc('Boundary sort key: scalar, or one value per ordered column.')],
        *,
        mode: Annotated[PaginationMode | str, Doc('BEFORE (previous page) or AFTER (next page).')],
        size: Annotated[int | None, Doc('Page size. None uses settings.default_page_size.')] = None,
        session: Annotated[AsyncSession | None, Doc('Session to use for execution (optional).')] = None,
    ) -> Annotated[builtins.list[Any], Doc('At most `size` rows, in the declared order of `query`.')]:
        """
        Build the keyset page for `cursor`, execute it, and return its rows in declared order.

        Raises
        ------
        NoOrderDefinedError
            If `query` is not ordered.
        CursorArityMismatchError
            If `cursor` does not match the ordered columns.
        """
        mode = PaginationMode(mode)
        final_size = self.settings.get_final_page_size(size)
        stmt = paginate(query, final_size, mode, cursor)

        s = self._resolve_session(session)
        result = await s.execute(stmt)

        scalars: ScalarResult[TModel] = result.scalars()
        rows: builtins.list[TModel] = list(scalars)
        logger.debug('%s: %s page of %d row(s)', self.model.__name__, mode, len(rows))
        return fix_orientation(rows, mode)

    async def before(
        self,
        query: QueryOrStmt,
        cursor: Any,
        *,
        size: int | None = None,
        session: AsyncSession | None = None,
    ) -> builtins.list[Any]:
        """Previous page: rows immediately preceding `cursor`."""
        return await self.page(query, cursor, mode=PaginationMode.BEFORE, size=size, session=session)

    async def after(
        self,
        query: QueryOrStmt,
        cursor: Any,
        *,
        size: int | None = None,
        session: AsyncSession | None = None,
    ) -> builtins.list[Any]:
        """Next page: rows immediately following `cursor`."""
        return await self.page(query, cursor, mode=PaginationMode.AFTER, size=size, session=session)
