from typing import Annotated

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode


class Settings(BaseSettings):
    # Logging
    log_level: str = "INFO"
    log_json: bool = True
    log_file: str | None = None

    # Host command table: root commands the host knows about
    host_commands: Annotated[list[str], NoDecode] = ["help", "?"]

    @field_validator("host_commands", mode="before")
    @classmethod
    def parse_host_commands(cls, v: object) -> object:
        if isinstance(v, str):
            return [n.strip() for n in v.split(",") if n.strip()]
        return v

    # HTTP surface: requests carrying this token run as the console
    console_token: str | None = None

    # Permissions
    permissions_path: str = "data/permissions.yaml"

    # Messages (colour codes use color_escape_char)
    color_escape_char: str = "&"
    sender_rejection_message: str = "&cThis command must be sent by a {sender_type}"
    internal_error_message: str = "&cAn internal error occurred while attempting to perform this command"
    unknown_command_message: str = 'Unknown command. Type "/help" for help.'

    # Dispatch policy
    fault_reports_handled: bool = True
    reject_duplicate_identifiers: bool = False

    model_config = {"env_file": ".env"}
