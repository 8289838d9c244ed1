# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Unit tests for ConverterEmitter.

Behaviour of the generated code against compiled messages is covered by the
integration tests; these check structure and text.
"""

from __future__ import annotations

import ast

import pytest

from grpcwizard.analysis import ContractAnalysis, analyze_manifest
from grpcwizard.emitters import ConverterEmitter
from grpcwizard.emitters.ast_builder import GENERATED_HEADER
from grpcwizard.manifest import ServiceManifest
from grpcwizard.models import GenerationOptions
from tests.helpers import make_manifest_data, operation, record

pytestmark = pytest.mark.unit

OPTIONS = GenerationOptions(namespace="app.grpc", service_name="App", proto_file_name="app.proto")


def analysis_for(operations, records) -> ContractAnalysis:
    data = make_manifest_data(operations, records)
    return analyze_manifest(ServiceManifest.model_validate(data))


def method_names(source: str) -> list[str]:
    tree = ast.parse(source)
    class_node = next(node for node in tree.body if isinstance(node, ast.ClassDef))
    return [node.name for node in class_node.body if isinstance(node, ast.FunctionDef)]


class TestPeopleConverters:
    def test_one_module_per_record_in_graph_order(
        self, people_analysis: ContractAnalysis, people_options: GenerationOptions
    ) -> None:
        artifacts = ConverterEmitter().emit(people_analysis, people_options)

        assert [a.file_name for a in artifacts] == [
            "get_all_people_request_converter.py",
            "people_reply_converter.py",
            "person_converter.py",
            "get_person_by_id_request_converter.py",
        ]
        assert {a.role for a in artifacts} == {"shared"}

    def test_modules_are_valid_python_with_four_static_methods(
        self, people_analysis: ContractAnalysis, people_options: GenerationOptions
    ) -> None:
        for artifact in ConverterEmitter().emit(people_analysis, people_options):
            assert artifact.content.startswith(GENERATED_HEADER)
            assert sorted(method_names(artifact.content)) == [
                "from_grpc",
                "from_grpc_list",
                "to_grpc",
                "to_grpc_list",
            ]
            assert artifact.content.count("@staticmethod") == 4

    def test_scalar_fields_copy_by_value(
        self, people_analysis: ContractAnalysis, people_options: GenerationOptions
    ) -> None:
        person = people_analysis.contract.record("people_app.models.Person")

        source = ConverterEmitter().render(person, people_analysis, people_options)

        assert "class PersonConverter:" in source
        assert "from people_app.models import Person" in source
        assert "from people_grpc import people_pb2" in source
        assert "result = people_pb2.Grpc_Person()" in source
        assert "result.first_name = item.first_name" in source
        assert (
            "return Person(id=item.id, first_name=item.first_name, last_name=item.last_name, "
            "bio=item.bio, photo_url=item.photo_url)"
        ) in source

    def test_record_collections_delegate_through_module_import(
        self, people_analysis: ContractAnalysis, people_options: GenerationOptions
    ) -> None:
        reply = people_analysis.contract.record("people_app.models.PeopleReply")

        source = ConverterEmitter().render(reply, people_analysis, people_options)

        assert "from people_grpc import people_pb2, person_converter" in source
        assert (
            "result.people.extend(person_converter.PersonConverter.to_grpc_list(item.people))"
            in source
        )
        assert (
            "return PeopleReply(people=person_converter.PersonConverter.from_grpc_list(item.people))"
            in source
        )

    def test_list_methods_map_elementwise(
        self, people_analysis: ContractAnalysis, people_options: GenerationOptions
    ) -> None:
        person = people_analysis.contract.record("people_app.models.Person")

        source = ConverterEmitter().render(person, people_analysis, people_options)

        assert "return [PersonConverter.to_grpc(item) for item in items]" in source
        assert "return [PersonConverter.from_grpc(item) for item in items]" in source

    def test_empty_record(
        self, people_analysis: ContractAnalysis, people_options: GenerationOptions
    ) -> None:
        empty = people_analysis.contract.record("people_app.models.GetAllPeopleRequest")

        source = ConverterEmitter().render(empty, people_analysis, people_options)

        assert "result = people_pb2.Grpc_GetAllPeopleRequest()" in source
        assert "return GetAllPeopleRequest()" in source


class TestConverterShapes:
    def test_scalar_collections_bulk_copy(self) -> None:
        analysis = analysis_for(
            [operation("Tag", "Request", "Awaitable[Request]")],
            [record("Request", tags="list[str]")],
        )

        source = ConverterEmitter().render(
            analysis.contract.record("app.models.Request"), analysis, OPTIONS
        )

        assert "result.tags.extend(item.tags)" in source
        assert "return Request(tags=list(item.tags))" in source

    def test_self_reference_uses_class_name(self) -> None:
        analysis = analysis_for(
            [operation("Tree", "Node", "Awaitable[Node]")],
            [record("Node", value="int", children="list[Node]")],
        )

        source = ConverterEmitter().render(
            analysis.contract.record("app.models.Node"), analysis, OPTIONS
        )

        assert "result.children.extend(NodeConverter.to_grpc_list(item.children))" in source
        assert "node_converter" not in source

    def test_mutual_references_import_each_other_as_modules(self) -> None:
        analysis = analysis_for(
            [operation("Get", "A", "Awaitable[B]")],
            [record("A", bs="list[B]"), record("B", as_="list[A]")],
        )
        emitter = ConverterEmitter()

        a_source = emitter.render(analysis.contract.record("app.models.A"), analysis, OPTIONS)
        b_source = emitter.render(analysis.contract.record("app.models.B"), analysis, OPTIONS)

        assert "from app.grpc import app_pb2, b_converter" in a_source
        assert "from app.grpc import app_pb2, a_converter" in b_source
        assert "from app.grpc.b_converter import" not in a_source

    def test_keyword_schema_field_uses_getattr_and_setattr(self) -> None:
        analysis = analysis_for(
            [operation("Route", "Leg", "Awaitable[Leg]")],
            [record("Leg", From="str", To="str")],
        )

        source = ConverterEmitter().render(
            analysis.contract.record("app.models.Leg"), analysis, OPTIONS
        )

        ast.parse(source)
        assert "setattr(result, 'from', item.From)" in source
        assert "From=getattr(item, 'from')" in source
        assert "result.to = item.To" in source
