"""Declarative base shared by all QnA tables."""

from sqlalchemy.orm import declarative_base

Base = declarative_base()
