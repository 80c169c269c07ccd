"""
Gateway Module - Typed query client for the relational store and object storage

Every call is an independent request/response unit of work: a query or a
commit, never a transaction spanning calls. ``gateway`` and ``storage`` are
the process-wide handles used by blueprints and loaders.
"""

import os
from flask import current_app
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.utils import secure_filename
from extensions import db
from models import (
    Project, Message, Profile, ProjectAssignment, Review, Service,
    TeamMember, TrainingRequest, Meeting
)
from .data import row_to_dict


TABLES = {
    'projects': Project,
    'messages': Message,
    'profiles': Profile,
    'project_assignments': ProjectAssignment,
    'reviews': Review,
    'services': Service,
    'team_members': TeamMember,
    'training_requests': TrainingRequest,
    'meetings': Meeting,
}


class GatewayError(Exception):
    """Raised when a gateway query, write or upload fails"""

    def __init__(self, message, table=None):
        super().__init__(message)
        self.table = table


class DataGateway:
    """Select/insert/update over the registered tables, returning dictionaries"""

    def __init__(self, session=None):
        self._session = session

    @property
    def session(self):
        return self._session if self._session is not None else db.session

    def model_for(self, table):
        model = TABLES.get(table)
        if model is None:
            raise GatewayError(f"Unknown table: {table}", table=table)
        return model

    def _column(self, model, name):
        if name not in model.__table__.columns:
            raise GatewayError(f"Unknown column {name} on {model.__tablename__}",
                               table=model.__tablename__)
        return getattr(model, name)

    def _filtered(self, model, eq=None, in_=None, gte=None):
        stmt = db.select(model)
        for name, value in (eq or {}).items():
            column = self._column(model, name)
            stmt = stmt.where(column.is_(None) if value is None else column == value)
        for name, values in (in_ or {}).items():
            stmt = stmt.where(self._column(model, name).in_(list(values)))
        for name, value in (gte or {}).items():
            stmt = stmt.where(self._column(model, name) >= value)
        return stmt

    def select(self, table, eq=None, in_=None, gte=None, order_by=None,
               ascending=True, limit=None):
        """
        Read rows from a table

        Args:
            table (str): Table name
            eq (dict): column -> value equality filters (None matches NULL)
            in_ (dict): column -> iterable membership filters
            gte (dict): column -> lower bound filters
            order_by (str): Column to order by
            ascending (bool): Sort direction
            limit (int): Maximum number of rows

        Returns:
            list: Rows as dictionaries
        """
        model = self.model_for(table)
        stmt = self._filtered(model, eq=eq, in_=in_, gte=gte)
        if order_by:
            column = self._column(model, order_by)
            stmt = stmt.order_by(column.asc() if ascending else column.desc())
        if limit is not None:
            stmt = stmt.limit(limit)
        try:
            rows = self.session.execute(stmt).scalars().all()
        except SQLAlchemyError as e:
            raise GatewayError(f"Select on {table} failed: {str(e)}", table=table) from e
        return [row_to_dict(row) for row in rows]

    def insert(self, table, values):
        """Insert one row and return it as a dictionary"""
        model = self.model_for(table)
        for name in values:
            self._column(model, name)
        row = model(**values)
        try:
            self.session.add(row)
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise GatewayError(f"Insert into {table} failed: {str(e)}", table=table) from e
        return row_to_dict(row)

    def update(self, table, values, eq):
        """Update the rows matching ``eq`` and return them"""
        if not eq:
            raise GatewayError(f"Refusing unfiltered update on {table}", table=table)
        model = self.model_for(table)
        for name in values:
            self._column(model, name)
        stmt = self._filtered(model, eq=eq)
        try:
            rows = self.session.execute(stmt).scalars().all()
            for row in rows:
                for name, value in values.items():
                    setattr(row, name, value)
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise GatewayError(f"Update on {table} failed: {str(e)}", table=table) from e
        return [row_to_dict(row) for row in rows]


class ObjectStorage:
    """File uploads stored under ``STORAGE_ROOT/<bucket>/<path>``"""

    def __init__(self, root=None, public_url=None):
        self._root = root
        self._public_url = public_url

    @property
    def root(self):
        return self._root or current_app.config.get('STORAGE_ROOT', 'storage')

    @property
    def public_url(self):
        return self._public_url or current_app.config.get('STORAGE_PUBLIC_URL', '/storage')

    @staticmethod
    def normalize_path(path):
        segments = [secure_filename(part) for part in str(path).split('/')]
        segments = [part for part in segments if part]
        if not segments:
            raise GatewayError(f"Invalid storage path: {path!r}")
        return '/'.join(segments)

    def local_path(self, bucket, path):
        return os.path.join(self.root, secure_filename(bucket),
                            *self.normalize_path(path).split('/'))

    def upload(self, bucket, path, file):
        """
        Store a file in a bucket

        Args:
            bucket (str): Bucket name
            path (str): Object path inside the bucket
            file: werkzeug FileStorage or raw bytes

        Returns:
            str: Normalized object path
        """
        object_path = self.normalize_path(path)
        destination = self.local_path(bucket, object_path)
        if os.path.exists(destination):
            raise GatewayError(f"Object already exists: {bucket}/{object_path}")
        try:
            os.makedirs(os.path.dirname(destination), exist_ok=True)
            if isinstance(file, (bytes, bytearray)):
                with open(destination, 'wb') as f:
                    f.write(file)
            else:
                file.save(destination)
        except OSError as e:
            raise GatewayError(f"Upload to {bucket}/{object_path} failed: {str(e)}") from e
        return object_path

    def get_public_url(self, bucket, path):
        return f"{self.public_url.rstrip('/')}/{secure_filename(bucket)}/{self.normalize_path(path)}"


gateway = DataGateway()
storage = ObjectStorage()


__all__ = [
    'TABLES',
    'GatewayError',
    'DataGateway',
    'ObjectStorage',
    'gateway',
    'storage'
]
