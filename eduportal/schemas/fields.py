from typing import Annotated

from pydantic import AfterValidator

from eduportal.services.accounts import normalize_email

# Request bodies name users by email; match them the way registration stores them
Email = Annotated[str, AfterValidator(normalize_email)]
