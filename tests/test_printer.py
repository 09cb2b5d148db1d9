#tests/test_printer.py

import json
from MacPing import Printer


def test_printer_text(tmp_path, capsys):
    outfile = tmp_path / "out.log"
    p = Printer(mode="text", outfile=str(outfile))
    p.emit("ok", "todo bien")
    p.emit("warn", "cuidado")
    captured = capsys.readouterr().out
    assert "[+] todo bien" in captured
    assert "[!] cuidado" in captured
    assert outfile.read_text().strip().splitlines()[0] == "[+] todo bien"


def test_printer_json(tmp_path):
    outfile = tmp_path / "out.json"
    p = Printer(mode="json", outfile=str(outfile))
    p.emit("info", "mac encontrada", ip="1.1.1.1", mac="aa:bb:cc:dd:ee:ff")
    data = [json.loads(line) for line in outfile.read_text().splitlines()]
    assert data[0]["level"] == "info"
    assert data[0]["mac"] == "aa:bb:cc:dd:ee:ff"


def test_printer_unwritable_file(tmp_path, capsys):
    p = Printer(mode="text", outfile=str(tmp_path / "no_existe" / "out.log"))
    p.emit("info", "hola")
    captured = capsys.readouterr()
    assert "[*] hola" in captured.out
    assert "No se pudo escribir" in captured.err
