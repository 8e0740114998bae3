from sqlalchemy import Column, String, Text, Boolean, Integer
from enrollment.database import Base


class DocumentRequirementRow(Base):
    __tablename__ = 'document_requirements'
    __table_args__ = {'sqlite_autoincrement': True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, unique=True)
    description = Column(Text, nullable=True)
    required = Column(Boolean, default=False, nullable=False)
    active = Column(Boolean, default=True, nullable=False)
    order = Column(Integer, nullable=False)
