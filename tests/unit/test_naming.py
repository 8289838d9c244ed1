# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Unit tests for naming conventions."""

from __future__ import annotations

import pytest

from grpcwizard import naming

pytestmark = pytest.mark.unit


class TestCaseConversion:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("FirstName", "firstName"),
            ("id", "id"),
            ("X", "x"),
            ("", ""),
        ],
    )
    def test_lower_camel_lowers_first_character_only(self, name: str, expected: str) -> None:
        assert naming.lower_camel(name) == expected

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("GetAllPeopleRequest", "get_all_people_request"),
            ("Person", "person"),
            ("HTTPReply", "http_reply"),
            ("Item2Box", "item2_box"),
            ("already_snake", "already_snake"),
        ],
    )
    def test_snake_case(self, name: str, expected: str) -> None:
        assert naming.snake_case(name) == expected

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("first_name", "firstName"),
            ("firstName", "firstName"),
            ("a__b", "aB"),
            ("_tail", "Tail"),
        ],
    )
    def test_json_field_name(self, name: str, expected: str) -> None:
        assert naming.json_field_name(name) == expected

    def test_acronym_variants_share_converter_module(self) -> None:
        assert naming.converter_module_name("HTTPReply") == naming.converter_module_name(
            "HttpReply"
        )


class TestArtifactNames:
    def test_schema_names_use_prefix(self) -> None:
        assert naming.schema_service_name("People") == "Grpc_People"
        assert naming.schema_message_name("Person") == "Grpc_Person"

    def test_converter_names(self) -> None:
        assert naming.converter_class_name("PeopleReply") == "PeopleReplyConverter"
        assert naming.converter_module_name("PeopleReply") == "people_reply_converter"

    def test_adapter_names(self) -> None:
        assert naming.server_adapter_class_name("People") == "Grpc_PeopleService"
        assert naming.server_adapter_module_name("People") == "grpc_people_service"
        assert naming.client_adapter_class_name("People") == "GrpcPeopleClient"
        assert naming.client_adapter_module_name("People") == "grpc_people_client"

    def test_compiled_module_names(self) -> None:
        assert naming.proto_module_stem("people.proto") == "people"
        assert naming.messages_module_name("people.proto") == "people_pb2"
        assert naming.services_module_name("people.proto") == "people_pb2_grpc"

    def test_compiled_service_names(self) -> None:
        assert naming.servicer_base_name("People") == "Grpc_PeopleServicer"
        assert naming.stub_class_name("People") == "Grpc_PeopleStub"
        assert (
            naming.add_servicer_function_name("People")
            == "add_Grpc_PeopleServicer_to_server"
        )
