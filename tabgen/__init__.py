from . import conf as conf
from . import extras as extras
from ._errors import DuplicateOptionError as DuplicateOptionError
from ._errors import InvalidArgumentError as InvalidArgumentError
from ._errors import InvalidCommandModelError as InvalidCommandModelError
from ._errors import TabgenError as TabgenError
from ._model import CommandNode as CommandNode
from ._model import OptionSpec as OptionSpec
from ._script import default_aliases as default_aliases
from ._script import generate as generate
from ._strings import sanitize as sanitize
from ._version import __version__ as __version__
