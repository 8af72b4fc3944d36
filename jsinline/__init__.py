# autoflake: skip_file

# high level
from ._api import inline_source as inline_source
from ._api import inline_variables as inline_variables
from ._inline import inline as inline

# edit buffer
from ._patcher import Patch as Patch
from ._patcher import Patcher as Patcher

# front end
from ._frontend import Module as Module
from ._frontend import ModuleScope as ModuleScope
from ._frontend import ParseError as ParseError
from ._frontend import analyze_module as analyze_module
from ._frontend import parse_module as parse_module

# syntax tree
from ._nodes import HOLE as HOLE
from ._nodes import ArrayPattern as ArrayPattern
from ._nodes import Expression as Expression
from ._nodes import Hole as Hole
from ._nodes import Identifier as Identifier
from ._nodes import Literal as Literal
from ._nodes import Node as Node
from ._nodes import ObjectPattern as ObjectPattern
from ._nodes import Property as Property
from ._nodes import VariableDeclaration as VariableDeclaration
from ._nodes import VariableDeclarator as VariableDeclarator

# scope metadata
from ._nodes import Definition as Definition
from ._nodes import Reference as Reference
from ._nodes import Variable as Variable

# steps
from ._binding import Access as Access
from ._binding import Binding as Binding
from ._binding import get_binding_for_variable as get_binding_for_variable
from ._binding import get_bindings as get_bindings
from ._references import check_references as check_references
from ._references import replace_references as replace_references
from ._remove import remove_binding as remove_binding
from ._replacement import build_replacement as build_replacement

# errors
from ._diagnostic import ErrorKind as ErrorKind
from ._diagnostic import InlineError as InlineError
from ._diagnostic import MultipleDefinitions as MultipleDefinitions
from ._diagnostic import NoMatchingBinding as NoMatchingBinding
from ._diagnostic import ReferenceRemoved as ReferenceRemoved
from ._diagnostic import UnexpectedNodeType as UnexpectedNodeType
from ._diagnostic import VariableIsMutated as VariableIsMutated
from ._diagnostic import show_pending_diagnostics as show_pending_diagnostics
