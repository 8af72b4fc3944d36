from ._parse import Module as Module
from ._parse import ParseError as ParseError
from ._parse import parse_module as parse_module
from ._scope import ModuleScope as ModuleScope
from ._scope import analyze_module as analyze_module
