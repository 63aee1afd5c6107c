from dataclasses import asdict, dataclass
from typing import Any, Dict


@dataclass
class User:
    id: str
    username: str
    created_at: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class Document:
    id: str
    user_id: str
    filename: str
    file_path: str
    uploaded_at: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class Statement:
    id: str
    user_id: str
    document_id: str
    start_date: str
    end_date: str
    uploaded_at: str
    filename: str = ""
    file_path: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
