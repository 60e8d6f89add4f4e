import main_c
import main_e
from huff import HUFF_TREE


def test_compress_then_expand(tmp_path, capsys):
    original = tmp_path / "in.txt"
    packed = tmp_path / "in.huf"
    restored = tmp_path / "out.txt"
    original.write_bytes(b"so much depends upon a red wheel barrow\n" * 50)

    assert main_c.main(["huff-compress", str(original), str(packed)]) == 0
    out = capsys.readouterr().out
    assert "Compression ratio:" in out
    assert "CompressFile" in out
    assert packed.read_bytes()[:4] == HUFF_TREE.to_bytes(4, "big")
    assert packed.stat().st_size < original.stat().st_size

    assert main_e.main(["huff-expand", str(packed), str(restored)]) == 0
    assert "ExpandFile" in capsys.readouterr().out
    assert restored.read_bytes() == original.read_bytes()


def test_empty_file(tmp_path):
    original = tmp_path / "empty"
    packed = tmp_path / "empty.huf"
    restored = tmp_path / "empty.out"
    original.write_bytes(b"")

    assert main_c.main(["huff-compress", str(original), str(packed)]) == 0
    assert main_e.main(["huff-expand", str(packed), str(restored)]) == 0
    assert restored.read_bytes() == b""


def test_usage(capsys):
    assert main_c.main(["/usr/bin/huff-compress.py"]) == 0
    assert "Usage:  huff-compress infile outfile [-d]" in capsys.readouterr().out
    assert main_e.main(["huff-expand", "only-one"]) == 0
    assert "Usage:  huff-expand" in capsys.readouterr().out


def test_missing_input(tmp_path, capsys):
    assert main_c.main(["huff-compress", str(tmp_path / "nope"), str(tmp_path / "out")]) == 1
    assert "not found" in capsys.readouterr().out
    assert not (tmp_path / "out").exists()


def test_expand_foreign_file_leaves_no_output(tmp_path, capsys):
    foreign = tmp_path / "plain.txt"
    foreign.write_bytes(b"this was never compressed")
    target = tmp_path / "plain.out"

    assert main_e.main(["huff-expand", str(foreign), str(target)]) == 1
    assert "illegal header" in capsys.readouterr().out
    assert not target.exists()


def test_expand_truncated_file_leaves_no_output(tmp_path, capsys):
    original = tmp_path / "in.bin"
    packed = tmp_path / "in.huf"
    original.write_bytes(bytes(range(256)) * 4)
    assert main_c.main(["huff-compress", str(original), str(packed)]) == 0
    packed.write_bytes(packed.read_bytes()[:-40])
    capsys.readouterr()

    target = tmp_path / "out.bin"
    assert main_e.main(["huff-expand", str(packed), str(target)]) == 1
    assert "PSEUDO_EOF" in capsys.readouterr().out
    assert not target.exists()


def test_dump_model(tmp_path, capsys):
    original = tmp_path / "in.txt"
    original.write_bytes(b"aab")
    assert main_c.main(["huff-compress", str(original), str(tmp_path / "in.huf"), "-d"]) == 0
    assert "node='a'  count=  2" in capsys.readouterr().out


def test_unreadable_input_is_reported(tmp_path, capsys):
    assert main_c.main(["huff-compress", str(tmp_path), str(tmp_path / "out")]) == 1
    assert "Error:" in capsys.readouterr().out
    assert main_e.main(["huff-expand", str(tmp_path), str(tmp_path / "out")]) == 1
    assert "Error:" in capsys.readouterr().out
    assert not (tmp_path / "out").exists()
