# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Unit tests for ServerAdapterEmitter and ClientAdapterEmitter."""

from __future__ import annotations

import ast

import pytest

from grpcwizard.analysis import ContractAnalysis
from grpcwizard.emitters import ClientAdapterEmitter, ServerAdapterEmitter
from grpcwizard.models import GenerationOptions

pytestmark = pytest.mark.unit


def class_of(source: str) -> ast.ClassDef:
    tree = ast.parse(source)
    return next(node for node in tree.body if isinstance(node, ast.ClassDef))


class TestServerAdapter:
    @pytest.fixture
    def source(
        self, people_analysis: ContractAnalysis, people_options: GenerationOptions
    ) -> str:
        return ServerAdapterEmitter().render(people_analysis, people_options)

    def test_artifact(
        self, people_analysis: ContractAnalysis, people_options: GenerationOptions
    ) -> None:
        artifact = ServerAdapterEmitter().emit(people_analysis, people_options)

        assert artifact.role == "server"
        assert artifact.file_name == "grpc_people_service.py"

    def test_subclasses_compiled_servicer(self, source: str) -> None:
        assert "class Grpc_PeopleService(people_pb2_grpc.Grpc_PeopleServicer):" in source
        assert "import grpc" in source
        assert "from people_app.services import IPeopleService" in source
        assert "from people_grpc import people_pb2, people_pb2_grpc" in source

    def test_holds_contract_implementation(self, source: str) -> None:
        assert "def __init__(self, service: IPeopleService) -> None:" in source
        assert "self._service = service" in source

    def test_one_async_method_per_operation(self, source: str) -> None:
        methods = [
            node.name for node in class_of(source).body if isinstance(node, ast.AsyncFunctionDef)
        ]

        assert methods == ["GetAll", "GetPersonById"]

    def test_method_converts_delegates_and_converts_back(self, source: str) -> None:
        assert (
            "async def GetAll(self, request: people_pb2.Grpc_GetAllPeopleRequest, "
            "context: grpc.aio.ServicerContext) -> people_pb2.Grpc_PeopleReply:"
        ) in source
        assert "base_request = GetAllPeopleRequestConverter.from_grpc(request)" in source
        assert "base_response = await self._service.GetAll(base_request)" in source
        assert "return PeopleReplyConverter.to_grpc(base_response)" in source

    def test_imports_each_converter_once(self, source: str) -> None:
        assert source.count("import PersonConverter") == 1
        assert (
            "from people_grpc.get_person_by_id_request_converter import "
            "GetPersonByIdRequestConverter"
        ) in source


class TestClientAdapter:
    @pytest.fixture
    def source(
        self, people_analysis: ContractAnalysis, people_options: GenerationOptions
    ) -> str:
        return ClientAdapterEmitter().render(people_analysis, people_options)

    def test_artifact(
        self, people_analysis: ContractAnalysis, people_options: GenerationOptions
    ) -> None:
        artifact = ClientAdapterEmitter().emit(people_analysis, people_options)

        assert artifact.role == "client"
        assert artifact.file_name == "grpc_people_client.py"

    def test_wraps_stub(self, source: str) -> None:
        assert "class GrpcPeopleClient:" in source
        assert "def __init__(self, stub: people_pb2_grpc.Grpc_PeopleStub) -> None:" in source
        assert "self._stub = stub" in source

    def test_host_types_in_signatures(self, source: str) -> None:
        assert "async def GetPersonById(self, request: GetPersonByIdRequest) -> Person:" in source
        assert (
            "from people_app.models import GetAllPeopleRequest, PeopleReply, "
            "GetPersonByIdRequest, Person"
        ) in source

    def test_method_converts_calls_stub_and_converts_back(self, source: str) -> None:
        assert "grpc_request = GetPersonByIdRequestConverter.to_grpc(request)" in source
        assert "grpc_response = await self._stub.GetPersonById(grpc_request)" in source
        assert "return PersonConverter.from_grpc(grpc_response)" in source

    def test_valid_python(self, source: str) -> None:
        methods = [
            node.name for node in class_of(source).body if isinstance(node, ast.AsyncFunctionDef)
        ]
        assert methods == ["GetAll", "GetPersonById"]
