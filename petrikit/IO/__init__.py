from .dot import to_dot_string, write_dot
from .lola import to_lola_string, write_lola
from .pnml import to_pnml_string, to_pnml_tree, write_pnml

__all__ = [
    "to_dot_string",
    "write_dot",
    "to_lola_string",
    "write_lola",
    "to_pnml_string",
    "to_pnml_tree",
    "write_pnml",
]
