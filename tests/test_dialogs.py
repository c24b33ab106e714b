import pytest

from tctools.dialogs import join_message, loadpack_command, pdf_command


def test_join_message_appends_space_to_each():
    assert join_message(["Disk", "full"]) == "Disk full "


def test_join_message_empty():
    assert join_message([]) == ""


@pytest.mark.parametrize("words", [["a"], ["one", "two", "three"], ["with space"]])
def test_join_message_keeps_words_in_order(words):
    message = join_message(words)
    assert message.endswith(" ")
    assert message.rstrip(" ").split(" ") == " ".join(words).split(" ")


def test_pdf_command():
    assert pdf_command("/home/tc/doc.pdf") == "mupdf /home/tc/doc.pdf &"


def test_loadpack_command_quotes_pack():
    assert loadpack_command("mnt/sdb1/pack.gz") == "sudo loadpack.sh 'mnt/sdb1/pack.gz'"


def test_loadpack_command_prefix():
    command = loadpack_command("x.gz")
    assert command.startswith("sudo loadpack.sh ")
    assert command.endswith("'x.gz'")