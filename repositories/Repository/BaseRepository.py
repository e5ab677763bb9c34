from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Generic, Iterator, List, Optional, Tuple, TypeVar, Union

from sqlalchemy import asc, desc
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.orm import Query, Session, selectinload

from config.repository import repository_settings
from repositories.Contracts.CriteriaInterface import CriteriaInterface
from repositories.Contracts.RepositoryCriteriaInterface import CriteriaInput, RemovalInput, RepositoryCriteriaInterface
from repositories.Contracts.RepositoryInterface import RepositoryInterface, ScopeCallback
from repositories.Criteria.CriteriaStore import CriteriaStore
from repositories.Exceptions import ModelNotFoundException, RepositoryException
from repositories.Pagination.LengthAwarePaginator import LengthAwarePaginator
from repositories.Repository.ModelHandle import Bound, ModelHandle, Unbound, coerce_handle, ensure_bound, is_model
from repositories.Support.ServiceContainer import ServiceContainer

T = TypeVar('T')
R = TypeVar('R')

_OPERATORS: Dict[str, Callable[[Any, Any], Any]] = {
    '=': lambda column, value: column == value,
    '!=': lambda column, value: column != value,
    '>': lambda column, value: column > value,
    '>=': lambda column, value: column >= value,
    '<': lambda column, value: column < value,
    '<=': lambda column, value: column <= value,
    'like': lambda column, value: column.like(f"%{value}%"),
    'ilike': lambda column, value: column.ilike(f"%{value}%"),
}


class BaseRepository(RepositoryInterface[T], RepositoryCriteriaInterface, Generic[T]):
    """
    Base repository with criteria and scope management.

    Every query-producing call runs the same pipeline against the repository's
    current handle: criteria are applied (transient first, then persistent),
    then the accumulated scopes, then the operation itself. Afterwards the
    transient criteria, the scopes and the model handle are reset so the next
    call starts from a clean query. Persistent criteria and the
    enabled/disabled state survive the reset.

    Public ``sqlalchemy.orm.Query`` methods the repository does not define
    itself are forwarded through the same pipeline, e.g. ``repository.one()``
    or ``repository.scalar()``.

    Usage:
        class UserRepository(BaseRepository[User]):
            def model(self) -> Type[User]:
                return User

        users = UserRepository(container)
        users.push_criteria(ActiveUsersCriteria())
        users.where('name', 'like', 'ali').get()
    """

    def __init__(self, app: ServiceContainer) -> None:
        self.app = app
        self.logger = logging.getLogger(self.__class__.__name__)
        self.db: Session = app.make('db')
        self.criteria = CriteriaStore()
        self._scopes: List[ScopeCallback] = []
        self._handle: Optional[ModelHandle] = None

        self.reset_criteria()
        self.reset_scopes()
        self.make_model()
        self.boot()

    @classmethod
    def resolve(cls, app: Optional[ServiceContainer] = None) -> 'BaseRepository[Any]':
        """
        Resolve a fresh repository instance from the given container.

        Falls back to the globally registered container when none is given.
        """
        if app is None:
            app = ServiceContainer.get_instance()

        if app is None:
            raise RepositoryException("Static repository calls require an initialized application container")

        return app.make(cls)

    @classmethod
    def call_static(cls, method: str, *args: Any, app: Optional[ServiceContainer] = None, **kwargs: Any) -> Any:
        """Forward a single call to a freshly resolved repository."""
        return getattr(cls.resolve(app), method)(*args, **kwargs)

    def __getattr__(self, name: str) -> Any:
        """Forward query builder methods through the query pipeline."""
        if name.startswith('_') or not callable(getattr(Query, name, None)):
            raise AttributeError(f"'{self.__class__.__name__}' object has no attribute '{name}'")

        def forward(*args: Any, **kwargs: Any) -> Any:
            return self._run(lambda query: getattr(query, name)(*args, **kwargs))

        return forward

    def make_model(self) -> T:
        """Create a new model instance."""
        model = self.app.make(self.model())

        if not is_model(model):
            raise RepositoryException(f"Class {self._model_name()} must be an instance of a mapped SQLAlchemy model")

        self._handle = Unbound(model)
        return model

    def reset_model(self) -> None:
        """Reset the model instance."""
        self.make_model()

    def get_model(self) -> T:
        """Get the model instance, recreating it if the handle is invalid."""
        if isinstance(self._handle, (Unbound, Bound)):
            return self._handle.model
        return self.make_model()

    def boot(self) -> None:
        """Boot the repository instance."""
        pass

    @property
    def scopes(self) -> Tuple[ScopeCallback, ...]:
        return tuple(self._scopes)

    def add_scope(self, scope: ScopeCallback) -> 'BaseRepository[T]':
        """Add a scope to be applied to the next query."""
        self._scopes.append(scope)
        return self

    def reset_scopes(self) -> 'BaseRepository[T]':
        """Reset the scopes."""
        self._scopes = []
        return self

    def with_criteria(self, criteria: CriteriaInput) -> 'BaseRepository[T]':
        self.criteria.with_criteria(criteria)
        return self

    def push_criteria(self, criteria: CriteriaInput) -> 'BaseRepository[T]':
        self.criteria.push(criteria)
        return self

    def remove_criteria(self, criteria: RemovalInput) -> 'BaseRepository[T]':
        self.criteria.remove(criteria)
        return self

    def get_criteria(self) -> Tuple[CriteriaInterface, ...]:
        return self.criteria.all()

    def enable_criteria(self) -> 'BaseRepository[T]':
        self.criteria.enable()
        return self

    def disable_criteria(self) -> 'BaseRepository[T]':
        self.criteria.disable()
        return self

    def use_criteria(self) -> 'BaseRepository[T]':
        self.criteria.use()
        return self

    def skip_criteria(self) -> 'BaseRepository[T]':
        self.criteria.skip()
        return self

    def reset_criteria(self) -> 'BaseRepository[T]':
        self.criteria.reset()
        return self

    def query(self) -> Query[T]:
        """Create a new query with active repository criteria and scopes applied."""
        return self._run(lambda query: query)

    def new_query(self) -> Query[T]:
        """Alias for query()."""
        return self.query()

    def find(self, id: Union[int, str]) -> Optional[T]:
        """Find a record by its primary key."""
        key = self._primary_key()
        return self._run(lambda query: query.filter(key == id).first())

    def find_or_fail(self, id: Union[int, str]) -> T:
        """Find a record by its primary key or raise an exception."""
        result = self.find(id)
        if result is None:
            raise ModelNotFoundException(f"{self._model_name()} with id {id} not found")
        return result

    def find_many(self, ids: List[Union[int, str]]) -> List[T]:
        """Find multiple records by their primary keys."""
        key = self._primary_key()
        return self._run(lambda query: query.filter(key.in_(ids)).all())

    def all(self) -> List[T]:
        """Get all records."""
        return self._run(lambda query: query.all())

    def get(self) -> List[T]:
        """Execute the query and get the results."""
        return self.all()

    def first(self) -> Optional[T]:
        """Get the first result."""
        return self._run(lambda query: query.first())

    def first_or_fail(self) -> T:
        """Get the first result or raise an exception."""
        result = self.first()
        if result is None:
            raise ModelNotFoundException(f"No {self._model_name()} found matching the criteria")
        return result

    def count(self) -> int:
        """Count the results."""
        return self._run(lambda query: query.count())

    def exists(self) -> bool:
        """Check if any records exist."""
        return self.count() > 0

    def pluck(self, column: str, key: Optional[str] = None) -> Union[List[Any], Dict[Any, Any]]:
        """Get a list of column values, or a dict keyed by another column."""
        column_attr = self._column(column)

        if key is None:
            return self._run(lambda query: [row[0] for row in query.with_entities(column_attr).all()])

        key_attr = self._column(key)
        return self._run(lambda query: {row[0]: row[1] for row in query.with_entities(key_attr, column_attr).all()})

    def paginate(self, page: int = 1, per_page: Optional[int] = None) -> Dict[str, Any]:
        """Paginate records."""
        per_page = LengthAwarePaginator.resolve_per_page(
            per_page, repository_settings.DEFAULT_PER_PAGE, repository_settings.MAX_PER_PAGE
        )
        page = LengthAwarePaginator.resolve_current_page(page)
        offset = LengthAwarePaginator.offset_for(page, per_page)

        def paginate_query(query: Query[T]) -> LengthAwarePaginator[T]:
            total = query.count()
            items = query.offset(offset).limit(per_page).all()
            return LengthAwarePaginator(items, total, per_page, page)

        return self._run(paginate_query).to_dict()

    def chunk(self, count: Optional[int] = None) -> Iterator[List[T]]:
        """
        Process records in chunks.

        Criteria and scopes are applied once, when chunk() is called; the
        repository is reset before the first chunk is fetched.
        """
        size = count or repository_settings.CHUNK_SIZE
        return self._iterate_chunks(self.query(), size)

    def _iterate_chunks(self, query: Query[T], size: int) -> Iterator[List[T]]:
        offset = 0
        while True:
            results = query.offset(offset).limit(size).all()
            if not results:
                break

            yield results
            offset += size

    def create(self, data: Dict[str, Any]) -> T:
        """Create a new record."""
        instance = self.model()(**data)
        self.db.add(instance)
        self.db.commit()
        self.db.refresh(instance)
        return instance

    def update(self, id: Union[int, str], data: Dict[str, Any]) -> T:
        """Update a record visible through the active criteria."""
        instance = self.find_or_fail(id)
        for key, value in data.items():
            if hasattr(instance, key):
                setattr(instance, key, value)
        self.db.commit()
        self.db.refresh(instance)
        return instance

    def delete(self, id: Union[int, str]) -> bool:
        """Delete a record visible through the active criteria."""
        instance = self.find_or_fail(id)
        self.db.delete(instance)
        self.db.commit()
        return True

    # Scope shortcuts

    def where(self, column: str, operator: str = '=', value: Any = None) -> 'BaseRepository[T]':
        """Add a where clause to the next query."""
        column_attr = self._column(column)

        if operator not in _OPERATORS:
            raise ValueError(f"Unsupported operator: {operator}")

        condition = _OPERATORS[operator](column_attr, value)
        return self.add_scope(lambda query: query.filter(condition))

    def where_in(self, column: str, values: List[Any]) -> 'BaseRepository[T]':
        """Add a where in clause to the next query."""
        column_attr = self._column(column)
        return self.add_scope(lambda query: query.filter(column_attr.in_(values)))

    def where_not_in(self, column: str, values: List[Any]) -> 'BaseRepository[T]':
        """Add a where not in clause to the next query."""
        column_attr = self._column(column)
        return self.add_scope(lambda query: query.filter(~column_attr.in_(values)))

    def where_null(self, column: str) -> 'BaseRepository[T]':
        column_attr = self._column(column)
        return self.add_scope(lambda query: query.filter(column_attr.is_(None)))

    def where_not_null(self, column: str) -> 'BaseRepository[T]':
        column_attr = self._column(column)
        return self.add_scope(lambda query: query.filter(column_attr.isnot(None)))

    def order_by(self, column: str, direction: str = 'asc') -> 'BaseRepository[T]':
        """Add an order by clause to the next query."""
        column_attr = self._column(column)
        ordering = desc(column_attr) if direction.lower() == 'desc' else asc(column_attr)
        return self.add_scope(lambda query: query.order_by(ordering))

    def limit(self, count: int) -> 'BaseRepository[T]':
        return self.add_scope(lambda query: query.limit(count))

    def offset(self, count: int) -> 'BaseRepository[T]':
        return self.add_scope(lambda query: query.offset(count))

    def with_relations(self, relations: List[str]) -> 'BaseRepository[T]':
        """Eager load relationships on the next query."""
        model = self.model()
        options = [selectinload(getattr(model, relation)) for relation in relations if hasattr(model, relation)]
        return self.add_scope(lambda query: query.options(*options))

    # Pipeline

    def _run(self, callback: Callable[[Query[Any]], R]) -> R:
        """Prepare the query, run the callback against it, then reset."""
        query = self._prepare_query()
        return self._reset_and_return(callback(query))

    def _prepare_query(self) -> Query[Any]:
        self._apply_criteria()
        self._apply_scopes()
        return self._bound().query

    def _apply_criteria(self) -> 'BaseRepository[T]':
        """Apply the active criteria to the current query."""
        self._bound()

        def apply_criterion(criterion: CriteriaInterface) -> None:
            bound = self._bound()
            self.logger.debug(f"Applying criteria {criterion.__class__.__name__}")
            self._handle = coerce_handle(criterion.apply(bound.query, type(bound.model)), bound)

        self.criteria.apply(apply_criterion)
        return self

    def _apply_scopes(self) -> 'BaseRepository[T]':
        """Apply all accumulated scopes to the current query."""
        for scope in self._scopes:
            if not callable(scope):
                continue

            bound = self._bound()
            self._handle = coerce_handle(scope(bound.query), bound)

        self._bound()
        return self

    def _bound(self) -> Bound:
        """Make sure the handle is a query, recovering an invalid handle first."""
        if not isinstance(self._handle, (Unbound, Bound)):
            self.logger.warning(f"Invalid model handle on {self.__class__.__name__}, recreating the model")
            self.reset_model()

        self._handle = ensure_bound(self._handle, self.db)
        return self._handle

    def _reset_and_return(self, result: R) -> R:
        """Reset the transient criteria, scopes and model and return the result."""
        self.criteria.reset_transient()
        self.reset_scopes()
        self.reset_model()
        return result

    def _column(self, column: str) -> Any:
        model = self.model()
        if not hasattr(model, column):
            raise ValueError(f"Column '{column}' does not exist on model {self._model_name()}")
        return getattr(model, column)

    def _primary_key(self) -> Any:
        return sa_inspect(self.model()).primary_key[0]

    def _model_name(self) -> str:
        return getattr(self.model(), '__name__', str(self.model()))
