"""FastAPI dependencies for FormatConverter API."""

from typing import Annotated

from fastapi import Depends, Request

from formatconverter.conversion.dispatcher import ConversionDispatcher


def get_dispatcher(request: Request) -> ConversionDispatcher:
    """Return the dispatcher resolved when the application was created.

    Args:
        request: Incoming HTTP request

    Returns:
        ConversionDispatcher stored on the application state
    """
    return request.app.state.dispatcher


Dispatcher = Annotated[ConversionDispatcher, Depends(get_dispatcher)]
