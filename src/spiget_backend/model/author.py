from sqlalchemy import Column, Integer, String, Text

from .base import Base


class Author(Base):
    __tablename__ = 'author'

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(255))
    icon_url = Column(String(1024))
    icon_data = Column(Text)  # base64

    @property
    def icon(self) -> dict:
        return {"url": self.icon_url, "data": self.icon_data}
