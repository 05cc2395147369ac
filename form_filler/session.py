from dataclasses import dataclass


@dataclass
class SessionMemory:
    """
    Values remembered across the controls of one fill pass.

    Confirmation fields copy from here instead of generating. A new pass must
    start with a new instance.
    """

    previous_value: str = ""
    previous_password: str = ""
    previous_username: str = ""
    previous_first_name: str = ""
    previous_last_name: str = ""
