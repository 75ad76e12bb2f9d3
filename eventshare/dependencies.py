from typing import Annotated

from fastapi import Depends, Request

from eventshare.config import AppConfig, get_config
from eventshare.services.share_content import ShareContentGenerator


def get_share_generator(request: Request) -> ShareContentGenerator:
    """Return the generator created for this app in its lifespan."""
    generator: ShareContentGenerator = request.app.state.share_generator
    return generator


# Type aliases for dependency injection
Config = Annotated[AppConfig, Depends(get_config)]
ShareGenerator = Annotated[ShareContentGenerator, Depends(get_share_generator)]
