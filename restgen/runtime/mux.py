"""
Request multiplexer that maps verbs and path templates to handlers.
"""

from typing import Any, Callable, Dict, List, Optional, Tuple

Handler = Callable[..., Any]


class RouteNode:
    """A node in the route trie structure.

    Each node represents a path segment and can have:
    - static_children: Dict mapping exact segment strings to child nodes
    - param_child: Single child node for path parameters (e.g., {id})
    - handlers: Dict mapping HTTP verbs to handlers at this path
    """

    def __init__(self):
        self.static_children: Dict[str, "RouteNode"] = {}
        self.param_child: Optional[Tuple[str, "RouteNode"]] = None
        self.handlers: Dict[str, Handler] = {}

    def add_route(self, segments: List[str], verb: str, handler: Handler) -> None:
        if not segments:
            self.handlers[verb] = handler
            return

        segment = segments[0]
        remaining = segments[1:]

        if segment.startswith("{") and segment.endswith("}"):
            param_name = segment[1:-1]
            if self.param_child is None:
                self.param_child = (param_name, RouteNode())
            elif self.param_child[0] != param_name:
                raise ValueError(
                    f"Conflicting path parameter names {self.param_child[0]!r} and {param_name!r}"
                )
            _, child_node = self.param_child
            child_node.add_route(remaining, verb, handler)
        else:
            if segment not in self.static_children:
                self.static_children[segment] = RouteNode()
            self.static_children[segment].add_route(remaining, verb, handler)

    def match(self, segments: List[str], verb: str) -> Optional[Tuple[Handler, Dict[str, str]]]:
        if not segments:
            handler = self.handlers.get(verb)
            if handler:
                return (handler, {})
            return None

        segment = segments[0]
        remaining = segments[1:]

        # Try static match first (more specific)
        if segment in self.static_children:
            result = self.static_children[segment].match(remaining, verb)
            if result:
                return result

        if self.param_child:
            param_name, child_node = self.param_child
            result = child_node.match(remaining, verb)
            if result:
                handler, params = result
                params[param_name] = segment
                return (handler, params)

        return None


def split_path(path: str) -> List[str]:
    return [segment for segment in path.split("/") if segment]


class ServeMux:
    """Routes requests to the handlers mounted by generated code."""

    def __init__(self):
        self._root = RouteNode()
        self.routes: List[Tuple[str, str]] = []

    def handle(self, verb: str, path: str, handler: Handler) -> None:
        """Register a handler for the given verb and path template."""
        self._root.add_route(split_path(path), verb.upper(), handler)
        self.routes.append((verb.upper(), path))

    def lookup(self, verb: str, path: str) -> Optional[Tuple[Handler, Dict[str, str]]]:
        """Return the handler and path parameters matching the request, if any."""
        return self._root.match(split_path(path), verb.upper())
