from typing import Optional

from sqlalchemy.orm import Session

from serviceshop.models.setting import Setting


class SettingRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, key: str) -> Optional[Setting]:
        return self.db.query(Setting).filter(Setting.key == key).first()

    def upsert(self, key: str, text: str) -> Setting:
        s = self.get(key)
        if s:
            s.text = text
        else:
            s = Setting(key=key, text=text)
            self.db.add(s)
        self.db.flush()
        return s
