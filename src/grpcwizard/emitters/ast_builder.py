# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""
AST Builder utility for generated Python artifacts.

Converters and adapters are assembled as ``ast`` nodes and unparsed, so every
emitted module is syntactically valid Python regardless of the names involved.
"""

from __future__ import annotations

import ast
import keyword
import logging

logger = logging.getLogger(__name__)

GENERATED_HEADER = "# Generated by grpcwizard. Do not edit by hand.\n"


class ImportSet:
    """Ordered, deduplicated ``from <module> import <name>`` requirements."""

    def __init__(self) -> None:
        self._plain: list[str] = []
        self._from: dict[str, list[str]] = {}

    def add_module(self, module: str) -> None:
        if module not in self._plain:
            self._plain.append(module)

    def add(self, module: str, name: str) -> None:
        names = self._from.setdefault(module, [])
        if name not in names:
            names.append(name)

    @property
    def plain(self) -> list[str]:
        return list(self._plain)

    @property
    def from_imports(self) -> dict[str, list[str]]:
        return {module: list(names) for module, names in self._from.items()}


class ASTBuilder:
    """
    Utility for building Python AST nodes for generated modules.

    Handles:
    - Import statement generation
    - Class, static method and async method definitions
    - Small expression/statement helpers (calls, attributes, assignments)
    - Complete module generation and unparsing
    """

    # -----------------------------------------------------------------------
    # Expressions
    # -----------------------------------------------------------------------

    def expression(self, source: str) -> ast.expr:
        """
        Parse a single expression (annotations, dotted names).

        Args:
            source: Expression source, e.g. "list[people_pb2.Grpc_Person]"

        Returns:
            AST expression node
        """
        return ast.parse(source, mode="eval").body

    def name(self, identifier: str) -> ast.Name:
        return ast.Name(id=identifier, ctx=ast.Load())

    def attribute(self, value: ast.expr, attr: str) -> ast.expr:
        """
        Build ``value.attr``; keyword attribute names use ``getattr``.

        Protobuf exposes fields named after Python keywords only through
        getattr/setattr.
        """
        if keyword.iskeyword(attr):
            return self.call(self.name("getattr"), [value, ast.Constant(value=attr)])
        return ast.Attribute(value=value, attr=attr, ctx=ast.Load())

    def call(
        self,
        func: ast.expr,
        args: list[ast.expr] | None = None,
        keywords: list[ast.keyword] | None = None,
    ) -> ast.Call:
        return ast.Call(func=func, args=args or [], keywords=keywords or [])

    def method_call(self, target: str, method: str, args: list[ast.expr]) -> ast.Call:
        """Build ``target.method(*args)`` where target is a dotted expression."""
        return self.call(self.attribute(self.expression(target), method), args)

    def list_comprehension(self, element: ast.expr, target: str, source: str) -> ast.ListComp:
        """Build ``[element for target in source]``."""
        return ast.ListComp(
            elt=element,
            generators=[
                ast.comprehension(
                    target=ast.Name(id=target, ctx=ast.Store()),
                    iter=self.name(source),
                    ifs=[],
                    is_async=0,
                )
            ],
        )

    # -----------------------------------------------------------------------
    # Statements
    # -----------------------------------------------------------------------

    def assign(self, target: str, value: ast.expr) -> ast.Assign:
        return ast.Assign(targets=[ast.Name(id=target, ctx=ast.Store())], value=value)

    def assign_attribute(self, owner: str, attr: str, value: ast.expr) -> ast.stmt:
        """Build ``owner.attr = value`` (``setattr`` for keyword attributes)."""
        if keyword.iskeyword(attr):
            return ast.Expr(
                value=self.call(
                    self.name("setattr"),
                    [self.name(owner), ast.Constant(value=attr), value],
                )
            )
        return ast.Assign(
            targets=[ast.Attribute(value=self.name(owner), attr=attr, ctx=ast.Store())],
            value=value,
        )

    def return_(self, value: ast.expr) -> ast.Return:
        return ast.Return(value=value)

    def docstring(self, text: str) -> ast.Expr:
        return ast.Expr(value=ast.Constant(value=text))

    # -----------------------------------------------------------------------
    # Definitions
    # -----------------------------------------------------------------------

    def arguments(self, params: list[tuple[str, str | None]]) -> ast.arguments:
        """
        Build a positional argument list.

        Args:
            params: (name, annotation source or None) pairs

        Returns:
            AST arguments node
        """
        return ast.arguments(
            posonlyargs=[],
            args=[
                ast.arg(
                    arg=param_name,
                    annotation=self.expression(annotation) if annotation else None,
                )
                for param_name, annotation in params
            ],
            vararg=None,
            kwonlyargs=[],
            kw_defaults=[],
            kwarg=None,
            defaults=[],
        )

    def function(
        self,
        function_name: str,
        params: list[tuple[str, str | None]],
        body: list[ast.stmt],
        returns: str | None = None,
        decorators: list[str] | None = None,
        is_async: bool = False,
    ) -> ast.stmt:
        """
        Generate a (possibly async) function or method definition.

        Args:
            function_name: Function name
            params: (name, annotation) pairs, including ``self`` for methods
            body: Statements of the function body
            returns: Return annotation source
            decorators: Decorator names, e.g. ["staticmethod"]
            is_async: Emit ``async def``

        Returns:
            AST FunctionDef or AsyncFunctionDef node
        """
        node_type = ast.AsyncFunctionDef if is_async else ast.FunctionDef
        return node_type(
            name=function_name,
            args=self.arguments(params),
            body=body,
            decorator_list=[self.name(decorator) for decorator in decorators or []],
            returns=self.expression(returns) if returns else None,
            type_params=[],
        )

    def class_def(
        self,
        class_name: str,
        body: list[ast.stmt],
        bases: list[str] | None = None,
        docstring: str | None = None,
    ) -> ast.ClassDef:
        """
        Generate a class definition.

        Args:
            class_name: Name of the generated class
            body: Class body statements
            bases: Base class expressions
            docstring: Optional class docstring

        Returns:
            AST ClassDef node
        """
        class_body: list[ast.stmt] = []
        if docstring:
            class_body.append(self.docstring(docstring))
        class_body.extend(body)
        if not class_body:
            class_body.append(ast.Pass())

        return ast.ClassDef(
            name=class_name,
            bases=[self.expression(base) for base in bases or []],
            keywords=[],
            decorator_list=[],
            body=class_body,
            type_params=[],
        )

    # -----------------------------------------------------------------------
    # Modules
    # -----------------------------------------------------------------------

    def generate_import_statement(self, module: str, names: list[str]) -> ast.ImportFrom:
        """
        Generate an import statement.

        Args:
            module: Module name to import from
            names: List of names to import

        Returns:
            AST ImportFrom node
        """
        aliases = [ast.alias(name=name, asname=None) for name in names]
        return ast.ImportFrom(module=module, names=aliases, level=0)

    def generate_module_with_imports(
        self,
        body: list[ast.stmt],
        imports: ImportSet,
        docstring: str | None = None,
    ) -> ast.Module:
        """
        Generate a complete module.

        Layout: docstring, ``from __future__ import annotations``, plain
        imports, then from-imports sorted by module, then the body.

        Args:
            body: Top-level definitions
            imports: Import requirements
            docstring: Optional module docstring

        Returns:
            AST Module node
        """
        module_body: list[ast.stmt] = []
        if docstring:
            module_body.append(self.docstring(docstring))
        module_body.append(self.generate_import_statement("__future__", ["annotations"]))
        for module in imports.plain:
            module_body.append(ast.Import(names=[ast.alias(name=module, asname=None)]))
        for module, names in sorted(imports.from_imports.items()):
            module_body.append(self.generate_import_statement(module, names))
        module_body.extend(body)

        module_node = ast.Module(body=module_body, type_ignores=[])
        ast.fix_missing_locations(module_node)
        return module_node

    def unparse_node(self, node: ast.AST) -> str:
        """
        Convert an AST node back to source code.

        Args:
            node: AST node to unparse

        Returns:
            Source code string, prefixed with the generated-file header
        """
        ast.fix_missing_locations(node)
        source = ast.unparse(node)
        logger.debug(
            "Unparsed %s into %d line(s)", type(node).__name__, source.count("\n") + 1
        )
        return GENERATED_HEADER + source + "\n"
