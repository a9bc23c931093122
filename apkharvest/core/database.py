# ==============================================================================
# DATABASE MODULE
# ==============================================================================
# SQLite catalog of extraction runs. Uses SQLAlchemy ORM for clean data access.
#
# Tables:
#   - containers: Source APK files that were extracted
#   - sprites:    One row per extracted sprite (frame count, image hash, ...)
#
# Re-extracting a container replaces its sprite rows, so the catalog always
# describes the latest extraction.
# ==============================================================================

import os
from datetime import datetime
from typing import Optional, List
from sqlalchemy import create_engine, Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import declarative_base, sessionmaker, relationship

from .hasher import FileHasher
from .models import ExtractionResult

# ==============================================================================
# SQLAlchemy Base Class
# ==============================================================================
Base = declarative_base()


# ==============================================================================
# CONTAINER MODEL
# ==============================================================================
# A source container file. The path is stored as an absolute path and is
# unique.
#
# Example:
#   container = Container(path="E:\\Game\\SPRITES\\monsters.apk",
#                         name="monsters", total_sprites=25)
# ==============================================================================
class Container(Base):
    """
    An extracted sprite container.

    Attributes:
        id (int):               Unique identifier
        path (str):             Absolute path of the source file
        name (str):             File name without extension
        hash_md5 (str):         MD5 of the source file at extraction time
        total_sprites (int):    Sprite count declared by the header
        extracted_count (int):  Sprites successfully extracted
        skipped_count (int):    Sprites skipped with a warning
        extracted_at:           When the latest extraction ran
    """
    __tablename__ = 'containers'

    id = Column(Integer, primary_key=True, autoincrement=True)
    path = Column(String(500), unique=True, nullable=False)
    name = Column(String(255), nullable=False)
    hash_md5 = Column(String(32), nullable=True)
    total_sprites = Column(Integer, default=0)
    extracted_count = Column(Integer, default=0)
    skipped_count = Column(Integer, default=0)
    extracted_at = Column(DateTime, default=datetime.now)

    sprites = relationship("SpriteRecord", back_populates="container",
                           cascade="all, delete-orphan",
                           order_by="SpriteRecord.sprite_index")

    def __repr__(self):
        return f"<Container(id={self.id}, name='{self.name}', sprites={self.extracted_count})>"


# ==============================================================================
# SPRITE RECORD MODEL
# ==============================================================================
class SpriteRecord(Base):
    """
    One extracted sprite.

    Attributes:
        id (int):            Unique identifier
        container_id (int):  Foreign key to the source container
        sprite_index (int):  Index within the container
        frame_count (int):   Number of frames in the frame table
        table_offset (int):  Frame table offset chosen by the resolver
                             (relative to the sprite start)
        image_size (int):    Image blob size in bytes
        image_md5 (str):     MD5 of the image blob
    """
    __tablename__ = 'sprites'

    id = Column(Integer, primary_key=True, autoincrement=True)
    container_id = Column(Integer, ForeignKey('containers.id'), nullable=False)
    sprite_index = Column(Integer, nullable=False)
    frame_count = Column(Integer, default=0)
    table_offset = Column(Integer, nullable=True)
    image_size = Column(Integer, default=0)
    image_md5 = Column(String(32), nullable=True)

    container = relationship("Container", back_populates="sprites")

    def __repr__(self):
        return f"<SpriteRecord(container_id={self.container_id}, index={self.sprite_index})>"


# ==============================================================================
# DATABASE CLASS
# ==============================================================================
# Usage:
#   db = Database("data/harvester.db")
#   db.record_extraction("monsters.apk", result)
#   containers = db.get_all_containers()
# ==============================================================================
class Database:
    """
    Database manager for the extraction catalog.

    Attributes:
        db_path (str): Path to the SQLite database file
        engine: SQLAlchemy engine instance
        Session: SQLAlchemy session factory
    """

    def __init__(self, db_path: str):
        """
        Initialize the database connection.

        Args:
            db_path: Path to the SQLite database file.
                    The file will be created if it doesn't exist.
        """
        self.db_path = db_path

        directory = os.path.dirname(db_path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        self.engine = create_engine(f'sqlite:///{db_path}', echo=False)
        self.Session = sessionmaker(bind=self.engine, expire_on_commit=False)

        Base.metadata.create_all(self.engine)

    # ==========================================================================
    # EXTRACTION RECORDING
    # ==========================================================================

    def record_extraction(self, container_path: str, result: ExtractionResult) -> Container:
        """
        Store (or replace) the catalog entry for one extracted container.

        Args:
            container_path: Path of the source file
            result: ExtractionResult returned by the reader

        Returns:
            The stored Container row
        """
        path = os.path.abspath(container_path)
        hasher = FileHasher()

        session = self.Session()
        try:
            container = session.query(Container).filter_by(path=path).first()
            if container is None:
                container = Container(path=path)
                session.add(container)
            else:
                container.sprites.clear()

            container.name = os.path.splitext(os.path.basename(path))[0]
            container.hash_md5 = hasher.hash_file_md5(path)
            container.total_sprites = result.total_sprites
            container.extracted_count = result.extracted_count
            container.skipped_count = len(result.skipped)
            container.extracted_at = datetime.now()

            for sprite in result.sprites:
                container.sprites.append(SpriteRecord(
                    sprite_index=sprite.index,
                    frame_count=sprite.frame_count,
                    table_offset=result.table_offsets.get(sprite.index),
                    image_size=len(sprite.image_data),
                    image_md5=hasher.hash_bytes(sprite.image_data),
                ))

            session.commit()
            return container
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    # ==========================================================================
    # QUERIES
    # ==========================================================================

    def get_all_containers(self) -> List[Container]:
        session = self.Session()
        try:
            return session.query(Container).order_by(Container.name).all()
        finally:
            session.close()

    def get_container_by_path(self, container_path: str) -> Optional[Container]:
        session = self.Session()
        try:
            return session.query(Container).filter_by(
                path=os.path.abspath(container_path)).first()
        finally:
            session.close()

    def get_sprites(self, container_id: int) -> List[SpriteRecord]:
        """Sprite rows of one container, ordered by index."""
        session = self.Session()
        try:
            return (session.query(SpriteRecord)
                    .filter_by(container_id=container_id)
                    .order_by(SpriteRecord.sprite_index)
                    .all())
        finally:
            session.close()

    def get_stats(self) -> dict:
        """
        Get overall catalog statistics.

        Returns:
            Dict with containers, sprites, skipped and frames totals
        """
        session = self.Session()
        try:
            containers = session.query(Container).all()
            sprites = session.query(SpriteRecord).all()
            return {
                'containers': len(containers),
                'sprites': len(sprites),
                'skipped': sum(c.skipped_count or 0 for c in containers),
                'frames': sum(s.frame_count or 0 for s in sprites),
                'image_bytes': sum(s.image_size or 0 for s in sprites),
            }
        finally:
            session.close()
