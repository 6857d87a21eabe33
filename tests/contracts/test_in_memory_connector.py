"""Contract tests for the in-memory connector and the Penneo entity helpers."""

from __future__ import annotations

from penneo.connector.memory import InMemoryConnector
from penneo.schemas.penneo import (
    CaseFile,
    Document,
    Folder,
    SignatureLine,
    Signer,
    SigningRequest,
)


def _saved(connector: InMemoryConnector, entity):  # type: ignore[no-untyped-def]
    assert connector.write_object(entity)
    return entity


def test_write_assigns_ids_and_read_restores_sendable_fields() -> None:
    connector = InMemoryConnector()
    case_file = _saved(connector, CaseFile(title="Lease", reference="R-1"))

    assert case_file.id == 1
    fresh = CaseFile(id=case_file.id)
    assert connector.read_object(fresh)
    assert fresh.title == "Lease"
    assert fresh.reference == "R-1"


def test_update_requires_existing_record() -> None:
    connector = InMemoryConnector()
    assert not connector.write_object(CaseFile(id=99, title="ghost"))


def test_delete_removes_record_and_links() -> None:
    connector = InMemoryConnector()
    case_file = _saved(connector, CaseFile(title="Lease"))
    document = _saved(connector, Document(title="Contract"))
    assert connector.link_entity(case_file, document)

    assert connector.delete_object(document)
    assert not connector.delete_object(document)
    assert case_file.get_documents(connector) == []


def test_case_file_helpers_link_and_list_children() -> None:
    connector = InMemoryConnector()
    case_file = _saved(connector, CaseFile(title="Lease"))
    document = _saved(connector, Document(title="Contract", type="signable"))
    signer = _saved(connector, Signer(name="Ada"))

    assert connector.link_entity(case_file, document)
    assert connector.link_entity(case_file, signer)

    assert [doc.title for doc in case_file.get_documents(connector)] == ["Contract"]
    assert [s.name for s in case_file.get_signers(connector)] == ["Ada"]
    found = connector.find_linked_entity(case_file, Document, document.id)
    assert found.ok
    assert not connector.find_linked_entity(case_file, Document, 999).ok


def test_actions_are_recorded() -> None:
    connector = InMemoryConnector()
    case_file = _saved(connector, CaseFile(title="Lease"))

    assert case_file.send(connector)
    assert case_file.activate(connector)
    assert [action for (_, action) in connector.store.actions] == ["send", "activate"]
    assert not CaseFile(id=50).send(connector)


def test_document_pdf_round_trips_through_assets() -> None:
    connector = InMemoryConnector()
    document = Document(title="Contract")
    document.set_pdf(b"%PDF-1.4 body")
    _saved(connector, document)
    connector.put_asset(document, "pdf", b"%PDF-1.4 body")

    assert document.get_pdf(connector) == b"%PDF-1.4 body"


def test_signing_request_link_and_signer_lookup() -> None:
    connector = InMemoryConnector()
    signer = _saved(connector, Signer(name="Ada"))
    request = _saved(connector, SigningRequest(email="ada@example.com"))
    connector.link_entity(signer, request)
    connector.put_asset(request, "link", "https://sign.test/abc")

    linked = signer.get_signing_request(connector)

    assert linked is not None
    assert linked.email == "ada@example.com"
    assert linked.get_link(connector) == "https://sign.test/abc"


def test_signature_line_and_folder_helpers() -> None:
    connector = InMemoryConnector()
    signer = _saved(connector, Signer(name="Ada"))
    line = _saved(connector, SignatureLine(role="CEO"))
    folder = _saved(connector, Folder(title="2024"))
    case_file = _saved(connector, CaseFile(title="Lease"))

    assert line.set_signer(connector, signer)
    assert folder.add_case_file(connector, case_file)
    assert [cf.id for cf in folder.get_case_files(connector)] == [case_file.id]
    assert folder.remove_case_file(connector, case_file)
    assert not folder.remove_case_file(connector, case_file)
    assert folder.get_case_files(connector) == []


def test_find_by_filters_on_wire_names() -> None:
    connector = InMemoryConnector()
    _saved(connector, CaseFile(title="Lease", reference="A"))
    _saved(connector, CaseFile(title="Loan", reference="B"))
    _saved(connector, CaseFile(title="Lease", reference="C"))

    result = connector.find_by(CaseFile, {"Title": "Lease"})

    assert result.ok
    assert [cf.reference for cf in result.value or []] == ["A", "C"]
    assert connector.find_one_by(CaseFile, {"reference": "B"}).value is not None
    assert not connector.find_one_by(CaseFile, {"reference": "Z"}).ok
    assert len(connector.find_by(CaseFile).value or []) == 3
