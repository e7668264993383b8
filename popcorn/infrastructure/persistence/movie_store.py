"""
Implementation SQLModel du stockage local des films.

Implemente l'interface IMovieStore pour la persistance des films en cache
dans la base de donnees SQLite via SQLModel. Le travail SQLite est execute
dans l'executor par defaut pour ne pas bloquer la boucle d'evenements.
"""

import asyncio
import json
import threading
from collections.abc import AsyncIterator, Callable
from functools import partial
from typing import Any, Optional, TypeVar

from sqlalchemy import Engine
from sqlmodel import Session, select

from popcorn.core.entities.movie import MovieCategory, MovieRecord
from popcorn.core.ports.repositories import IMovieStore
from popcorn.infrastructure.persistence.change_notifier import ChangeNotifier
from popcorn.infrastructure.persistence.models import BookmarkModel, MovieModel, utc_now

T = TypeVar("T")


class SQLModelMovieStore(IMovieStore):
    """
    Stockage SQLModel des films en cache.

    Les films sont stockes par (id, categorie) dans la table movies ; le
    favori est stocke par id dans la table bookmarks et rattache a chaque
    lecture par jointure externe.

    Example:
        store = SQLModelMovieStore(engine)
        await store.upsert_many(records)
        cached = await store.get_by_category(MovieCategory.TRENDING)
    """

    def __init__(self, engine: Engine) -> None:
        """
        Initialise le stockage.

        Args :
            engine : Engine SQLAlchemy dont les tables ont ete creees
        """
        self._engine = engine
        self._lock = threading.Lock()
        self._notifier = ChangeNotifier()

    async def _run(self, func: Callable[..., T], *args: Any) -> T:
        """Execute une operation de session dans l'executor par defaut."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, partial(self._in_session, func, *args))

    def _in_session(self, func: Callable[..., T], *args: Any) -> T:
        with self._lock, Session(self._engine) as session:
            return func(session, *args)

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------

    @staticmethod
    def _to_entity(model: MovieModel, bookmark: Optional[BookmarkModel]) -> MovieRecord:
        """Convertit un modele DB (et son favori) en entite domaine."""
        genres_list = json.loads(model.genres_json) if model.genres_json else []
        return MovieRecord(
            id=model.id,
            category=MovieCategory(model.category),
            title=model.title,
            original_title=model.original_title,
            overview=model.overview,
            poster_path=model.poster_path,
            backdrop_path=model.backdrop_path,
            release_date=model.release_date,
            vote_average=model.vote_average,
            vote_count=model.vote_count,
            popularity=model.popularity,
            original_language=model.original_language,
            genres=tuple(genres_list),
            runtime=model.runtime,
            tagline=model.tagline,
            is_bookmarked=bookmark.is_bookmarked if bookmark else False,
        )

    @staticmethod
    def _apply(model: MovieModel, record: MovieRecord) -> None:
        """Recopie les metadonnees d'une entite dans un modele DB."""
        model.title = record.title
        model.original_title = record.original_title
        model.overview = record.overview
        model.poster_path = record.poster_path
        model.backdrop_path = record.backdrop_path
        model.release_date = record.release_date
        model.vote_average = record.vote_average
        model.vote_count = record.vote_count
        model.popularity = record.popularity
        model.original_language = record.original_language
        model.genres_json = json.dumps(list(record.genres)) if record.genres else None
        model.runtime = record.runtime
        model.tagline = record.tagline
        model.updated_at = utc_now()

    @staticmethod
    def _with_bookmarks():
        """Requete de base : films avec jointure externe sur les favoris."""
        return select(MovieModel, BookmarkModel).select_from(MovieModel).join(
            BookmarkModel,
            BookmarkModel.movie_id == MovieModel.id,
            isouter=True,
        )

    # ------------------------------------------------------------------
    # Operations de session (executees dans l'executor)
    # ------------------------------------------------------------------

    def _select_by_category(self, session: Session, category: str) -> list[MovieRecord]:
        statement = (
            self._with_bookmarks()
            .where(MovieModel.category == category)
            .order_by(MovieModel.position)
        )
        return [self._to_entity(m, b) for m, b in session.exec(statement).all()]

    def _select_by_id(self, session: Session, movie_id: int) -> Optional[MovieRecord]:
        statement = (
            self._with_bookmarks()
            .where(MovieModel.id == movie_id)
            .order_by(MovieModel.updated_at.desc())
        )
        row = session.exec(statement).first()
        if row is None:
            return None
        return self._to_entity(*row)

    def _upsert(
        self, session: Session, records: list[MovieRecord], keep_position: bool = False
    ) -> None:
        for position, record in enumerate(records):
            model = session.get(MovieModel, (record.id, record.category.value))
            if model is None:
                model = MovieModel(id=record.id, category=record.category.value, position=position)
            elif not keep_position:
                model.position = position
            self._apply(model, record)
            session.add(model)

            bookmark = session.get(BookmarkModel, record.id)
            if bookmark is None:
                bookmark = BookmarkModel(movie_id=record.id)
            bookmark.is_bookmarked = record.is_bookmarked
            bookmark.updated_at = utc_now()
            session.add(bookmark)
            # Rend les lignes visibles a session.get pour les doublons du lot
            session.flush()
        session.commit()

    def _toggle(self, session: Session, movie_id: int) -> bool:
        exists = session.exec(
            select(MovieModel.id).where(MovieModel.id == movie_id).limit(1)
        ).first()
        if exists is None:
            return False
        bookmark = session.get(BookmarkModel, movie_id)
        if bookmark is None:
            bookmark = BookmarkModel(movie_id=movie_id, is_bookmarked=False)
        bookmark.is_bookmarked = not bookmark.is_bookmarked
        bookmark.updated_at = utc_now()
        session.add(bookmark)
        session.commit()
        return True

    def _select_bookmarked(self, session: Session) -> list[MovieRecord]:
        statement = (
            self._with_bookmarks()
            .where(BookmarkModel.is_bookmarked == True)  # noqa: E712
            .order_by(MovieModel.updated_at.desc())
        )
        return _unique_by_id(self._to_entity(m, b) for m, b in session.exec(statement).all())

    def _select_matching(self, session: Session, query: str) -> list[MovieRecord]:
        statement = (
            self._with_bookmarks()
            .where(MovieModel.title.contains(query, autoescape=True))
            .order_by(MovieModel.updated_at.desc())
        )
        return _unique_by_id(self._to_entity(m, b) for m, b in session.exec(statement).all())

    # ------------------------------------------------------------------
    # IMovieStore
    # ------------------------------------------------------------------

    async def get_by_category(self, category: MovieCategory) -> list[MovieRecord]:
        """Instantane des films en cache pour une categorie, dans l'ordre de l'API."""
        return await self._run(self._select_by_category, category.value)

    async def get_by_id(self, movie_id: int) -> Optional[MovieRecord]:
        """Enregistrement le plus recemment mis a jour pour cet id."""
        return await self._run(self._select_by_id, movie_id)

    async def upsert_many(self, records: list[MovieRecord]) -> None:
        """Insere ou met a jour les films ; le rang suit l'ordre de la liste."""
        if not records:
            return
        await self._run(self._upsert, list(records))
        self._notifier.notify()

    async def upsert_one(self, record: MovieRecord) -> None:
        """Insere ou met a jour un film en conservant son rang existant."""
        await self._run(self._upsert, [record], True)
        self._notifier.notify()

    async def toggle_flag(self, movie_id: int) -> bool:
        """Inverse le favori ; False si aucun film n'existe pour cet id."""
        toggled = await self._run(self._toggle, movie_id)
        if toggled:
            self._notifier.notify()
        return toggled

    async def is_bookmarked(self, movie_id: int) -> bool:
        record = await self.get_by_id(movie_id)
        return record.is_bookmarked if record else False

    async def observe_bookmarked(self) -> AsyncIterator[list[MovieRecord]]:
        """Emet la liste des favoris a l'abonnement puis a chaque ecriture."""
        with self._notifier.listen() as changed:
            while True:
                changed.clear()
                yield await self._run(self._select_bookmarked)
                await changed.wait()

    async def search_local(self, query: str) -> list[MovieRecord]:
        """Films en cache dont le titre contient la requete (insensible a la casse ASCII)."""
        query = query.strip()
        if not query:
            return []
        return await self._run(self._select_matching, query)


def _unique_by_id(records) -> list[MovieRecord]:
    """Garde le premier enregistrement rencontre pour chaque id."""
    seen: set[int] = set()
    unique = []
    for record in records:
        if record.id not in seen:
            seen.add(record.id)
            unique.append(record)
    return unique
