import os
import tempfile
from textundo import TextEditor
from textundo.dump import readDump, writeDump
from textundo.search import buildIndex, findFiles


def readFile(path):
    with open(path, encoding="utf-8", newline="") as f:
        return f.read()


def runExample(workDir):
    notesPath = os.path.join(workDir, "notes.txt")

    editor = TextEditor()
    editor.openFile(notesPath)
    assert editor.showContent() == ""

    editor.edit("buy milk")
    editor.edit("buy milk\nfix the undo button")
    editor.edit("buy milk\nfix the undo button\ncall Bob")
    assert readFile(notesPath).endswith("call Bob")

    editor.undo()
    assert editor.showContent() == "buy milk\nfix the undo button"
    assert readFile(notesPath) == editor.showContent()

    editor.undo()
    editor.redo()
    assert editor.showContent() == "buy milk\nfix the undo button"

    # a new edit drops whatever could still be redone
    editor.edit("buy oat milk\nfix the undo button")
    assert not editor.canRedo()

    dumpPath = os.path.join(workDir, "notes.xml")
    writeDump(editor.document.export(), dumpPath, "xml")
    assert readDump(dumpPath).content == "buy oat milk\nfix the undo button"

    with open(os.path.join(workDir, "todo.txt"), "w", encoding="utf-8") as f:
        f.write("nothing about milk here\n")
    assert [os.path.basename(p) for p in findFiles(workDir, ["undo"])] == ["notes.txt"]
    index = buildIndex(workDir, ["milk", "undo"])
    assert [os.path.basename(p) for p in index["milk"]] == ["notes.txt", "todo.txt"]


if __name__ == "__main__":
    with tempfile.TemporaryDirectory() as workDir:
        runExample(workDir)
