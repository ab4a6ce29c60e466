from .ai import CompletionProviderProtocol
from .extract import MarkerConventionProtocol
from .fs import GitRepositoryProtocol
from .logging import LoggerFactoryProtocol, LoggerLikeProtocol
from .templating import TemplateEngineProtocol

__all__ = [
    'CompletionProviderProtocol',
    'MarkerConventionProtocol',
    'GitRepositoryProtocol',
    'LoggerFactoryProtocol',
    'LoggerLikeProtocol',
    'TemplateEngineProtocol',
]
