from dataclasses import dataclass

from src.authbridge.core.services import DbSessionService


@dataclass
class ApplicationDependencies:
    database_service: DbSessionService
