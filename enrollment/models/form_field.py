from sqlalchemy import Column, String, Boolean, Integer, JSON
from enrollment.database import Base


class FormFieldRow(Base):
    __tablename__ = 'form_fields'
    __table_args__ = {'sqlite_autoincrement': True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False, unique=True)
    label = Column(String(255), nullable=False)
    type = Column(String(20), nullable=False)
    required = Column(Boolean, default=False, nullable=False)
    section = Column(String(20), nullable=False, index=True)
    order = Column(Integer, nullable=False)
    active = Column(Boolean, default=True, nullable=False)
    options = Column(JSON, nullable=True)
