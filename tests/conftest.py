"""Shared fixtures: an in-memory archive implementing the reader interface."""

import io
from typing import Iterator, List, Optional

import pytest

from pstattach.models.message_kind import MessageKind
from pstattach.services.archive_reader.base import (
    Archive,
    ArchiveReadError,
    Attachment,
    Folder,
    Message,
    MessageNotFoundError,
)


class FakeAttachment(Attachment):
    def __init__(self, filename: str, data: bytes = b"", short_name: str = "", fail_open: bool = False):
        self.filename = filename
        self.data = data
        self.short_name = short_name
        self.fail_open = fail_open
        self.streams: List[io.BytesIO] = []

    def declared_filename(self) -> str:
        return self.filename

    def short_filename(self) -> str:
        return self.short_name

    def open_stream(self) -> io.BytesIO:
        if self.fail_open:
            raise ArchiveReadError(f"cannot read {self.filename}")
        stream = io.BytesIO(self.data)
        self.streams.append(stream)
        return stream


class FakeMessage(Message):
    def __init__(
        self,
        message_id: int,
        attachments: Optional[List[FakeAttachment]] = None,
        kind: MessageKind = MessageKind.PLAIN,
        subject: str = "",
        body: str = "",
        sender_name: str = "",
        sender_email: str = "",
        display_to: str = "",
        display_cc: str = "",
        display_bcc: str = "",
        representing_email: str = "",
        summary: str = "",
        failing_fields: tuple = (),
    ):
        self.message_id = message_id
        self.attachments = attachments or []
        self._kind = kind
        self.fields = {
            "subject": subject,
            "body": body,
            "sender_name": sender_name,
            "sender_email_address": sender_email,
            "display_to": display_to,
            "display_cc": display_cc,
            "display_bcc": display_bcc,
            "sent_representing_email_address": representing_email,
            "summary": summary,
        }
        self.failing_fields = failing_fields

    def _field(self, name: str) -> str:
        if name in self.failing_fields:
            raise ArchiveReadError(f"corrupt {name}")
        return self.fields[name]

    def id(self) -> int:
        return self.message_id

    def kind(self) -> MessageKind:
        return self._kind

    def attachment_count(self) -> int:
        return len(self.attachments)

    def attachment(self, index: int) -> FakeAttachment:
        return self.attachments[index]

    def subject(self) -> str:
        return self._field("subject")

    def display_to(self) -> str:
        return self._field("display_to")

    def sent_representing_email_address(self) -> str:
        return self._field("sent_representing_email_address")

    def display_cc(self) -> str:
        return self._field("display_cc")

    def display_bcc(self) -> str:
        return self._field("display_bcc")

    def sender_email_address(self) -> str:
        return self._field("sender_email_address")

    def sender_name(self) -> str:
        return self._field("sender_name")

    def body(self) -> str:
        return self._field("body")

    def summary(self) -> str:
        return self._field("summary")


class FakeFolder(Folder):
    def __init__(
        self,
        name: str,
        children: Optional[List["FakeFolder"]] = None,
        messages: Optional[List[FakeMessage]] = None,
        fail_name: bool = False,
        fail_subfolders: bool = False,
        fail_messages: bool = False,
    ):
        self.name = name
        self.children = children or []
        self._messages = messages or []
        self.fail_name = fail_name
        self.fail_subfolders = fail_subfolders
        self.fail_messages = fail_messages

    def display_name(self) -> str:
        if self.fail_name:
            raise ArchiveReadError("corrupt folder name")
        return self.name

    def subfolders(self) -> List["FakeFolder"]:
        if self.fail_subfolders:
            raise ArchiveReadError(f"cannot list subfolders of {self.name}")
        return list(self.children)

    def content_count(self) -> int:
        return len(self._messages)

    def messages(self) -> Iterator[FakeMessage]:
        if self.fail_messages:
            raise ArchiveReadError(f"cannot list messages of {self.name}")
        return iter(self._messages)


class FakeArchive(Archive):
    def __init__(self, root: FakeFolder, name: str = "Personal Folders"):
        self.root = root
        self.name = name
        self.closed = False

    def display_name(self) -> str:
        return self.name

    def root_folder(self) -> FakeFolder:
        return self.root

    def lookup_message(self, message_id: int) -> FakeMessage:
        found = self._find(self.root, message_id)
        if found is None:
            raise MessageNotFoundError(f"No message with id {message_id}")
        return found

    def _find(self, folder: FakeFolder, message_id: int) -> Optional[FakeMessage]:
        for message in folder.messages():
            if message.id() == message_id:
                return message
        for child in folder.subfolders():
            found = self._find(child, message_id)
            if found is not None:
                return found
        return None

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def output_dir(tmp_path):
    """Empty output directory."""
    path = tmp_path / "out"
    path.mkdir()
    return path


@pytest.fixture
def sample_archive():
    """
    Archive with the tree:

        root
        ├── Invoices2023 (msg 100: invoice.pdf)
        │   └── Paid (msg 101: receipt.pdf)
        └── Personal (msg 200: photo.jpg)
            └── Family (msg 201: kids.png)
        root messages: msg 42 (no attachments), msg 7 (report.pdf x2)
    """
    paid = FakeFolder("Paid", messages=[FakeMessage(101, [FakeAttachment("receipt.pdf", b"receipt")])])
    invoices = FakeFolder(
        "Invoices2023",
        children=[paid],
        messages=[FakeMessage(100, [FakeAttachment("invoice.pdf", b"invoice")], subject="Invoice 4711")],
    )
    family = FakeFolder("Family", messages=[FakeMessage(201, [FakeAttachment("kids.png", b"kids")])])
    personal = FakeFolder(
        "Personal",
        children=[family],
        messages=[FakeMessage(200, [FakeAttachment("photo.jpg", b"photo")], subject="Holiday")],
    )
    root = FakeFolder(
        "Top of Personal Folders",
        children=[invoices, personal],
        messages=[
            FakeMessage(42, subject="No attachments here"),
            FakeMessage(
                7,
                [FakeAttachment("report.pdf", b"first"), FakeAttachment("report.pdf", b"second")],
                subject="Quarterly report",
            ),
        ],
    )
    return FakeArchive(root)
