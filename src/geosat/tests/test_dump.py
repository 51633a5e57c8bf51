import io

import numpy as np
import pytest

from geosat import dump
from geosat.tests.fixtures import make_image
from geosat.tests.fixtures.safh5_fixture import create_safh5_product


def test_dump_image_summary():
    img = make_image(pixels=np.array([[1, 2], [3, 4]], dtype=np.uint8), slope=0.01, offset=0.0)
    out = io.StringIO()
    dump.dump_image(img, out=out)
    lines = out.getvalue().splitlines()
    assert lines[0] == 'TEST 2004-01-19 12:00'
    assert lines[1] == ' proj: GEOS(sublon: 0.0, orbitRadius: 42164.0) ch.id: 9 sp.id: 55'
    assert lines[2].startswith(' size: 2x2 factor: ')
    assert ' offset: 1856x1856' in lines[2]
    assert '2x2 3bpp *0.01+0.0 decscale: 2' in lines[4]
    assert 'DX 3622 DXY 3622 CHID 9' in lines[4]
    assert len(lines) == 5


def test_dump_image_contents():
    img = make_image(pixels=np.array([[1, 2, 3], [4, 5, 6]], dtype=np.uint8), slope=2.0, offset=1.0)
    out = io.StringIO()
    dump.dump_image(img, with_contents=True, out=out)
    lines = out.getvalue().splitlines()
    header = lines.index('Coord\tUnscaled\tScaled')
    rows = lines[header + 1:]
    # every column of every line
    assert len(rows) == 6
    assert rows[0] == '0x0\t1\t3.0'
    assert rows[2] == '2x0\t3\t7.0'
    assert rows[5] == '2x1\t6\t13.0'


def test_main_dumps_file(tmp_path, capsys):
    path = create_safh5_product(tmp_path / 'ct.h5')
    assert dump.main([path]) == 0
    out = capsys.readouterr().out
    assert out.startswith('CT 2004-01-19 12:00')
    assert 'Coord' not in out


def test_main_with_area(tmp_path, capsys):
    path = create_safh5_product(tmp_path / 'ct.h5')
    assert dump.main(['--contents', '--area', '1,1,2,2', path]) == 0
    out = capsys.readouterr().out
    assert ' size: 2x2 ' in out
    assert '0x0\t5\t5.0' in out
    assert '1x1\t10\t10.0' in out


def test_main_reports_failures(tmp_path, capsys):
    good = create_safh5_product(tmp_path / 'ct.h5')
    assert dump.main([str(tmp_path / 'missing.h5'), good]) == 1
    assert 'CT 2004-01-19 12:00' in capsys.readouterr().out


def test_main_bad_area():
    with pytest.raises(SystemExit):
        dump.main(['--area', 'a,b', 'x.h5'])
