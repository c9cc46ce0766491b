import pytest

from ssgamelist.gamelist.clone_fixer import CloneReconciler, load_reference_games
from ssgamelist.gamelist.errors import ReferenceLoadError
from ssgamelist.gamelist.game import Game, LocalizedText

DAT_TEMPLATE = """<?xml version="1.0"?>
<datafile>
{games}
</datafile>
"""


def _dat(write_file, *games: str):
    return write_file('ref.dat', DAT_TEMPLATE.format(games='\n'.join(games)))


def _game(rom_id: str, path: str, clone_of: str = '0') -> Game:
    return Game(rom_id=rom_id, path=path, clone_of=clone_of, names=[LocalizedText('wor', path)])


@pytest.mark.unit
def test_load_reference_games(reference_dat):
    games = load_reference_games(reference_dat)

    assert len(games) == 4
    parent, clone = games[0], games[1]
    assert parent.path == 'parent.zip'
    assert parent.clone_of == ''
    assert parent.get_name().text == 'Alpha Parent'
    assert clone.path == 'game.zip'
    assert clone.clone_of == 'parent'


@pytest.mark.unit
def test_load_reference_games_keeps_existing_extension(write_file):
    dat = _dat(write_file, '<game name="game.zip" cloneof="parent"><description>G</description></game>')

    games = load_reference_games(dat)

    assert games[0].path == 'game.zip'


@pytest.mark.unit
@pytest.mark.parametrize("content", [
    '<datafile><game name="a"></datafile>',
    '<gameList><game name="a"/></gameList>',
    '<datafile><header/></datafile>',
])
def test_load_reference_games_rejects_bad_documents(write_file, content):
    path = write_file('bad.dat', content)

    with pytest.raises(ReferenceLoadError):
        load_reference_games(path)


@pytest.mark.unit
def test_load_reference_games_missing_file(tmp_path):
    with pytest.raises(ReferenceLoadError):
        load_reference_games(tmp_path / 'missing.dat')


@pytest.mark.unit
def test_reconcile_sets_parent_rom_id(write_file):
    dat = _dat(
        write_file,
        '<game name="game" cloneof="parent"><description>Game</description></game>',
        '<game name="parent"><description>Parent</description></game>',
    )
    games = [_game('10', 'game.zip'), _game('20', 'parent.zip')]

    report = CloneReconciler().reconcile(games, dat)

    assert games[0].clone_of == '20'
    assert games[1].clone_of == '0'
    assert report.fixed == [('10', '20')]
    assert report.not_a_clone == 1
    assert report.checked == 2


@pytest.mark.unit
def test_reconcile_skips_games_already_marked_as_clones(write_file):
    dat = _dat(
        write_file,
        '<game name="game" cloneof="parent"><description>Game</description></game>',
    )
    games = [_game('10', 'game.zip', clone_of='99'), _game('20', 'parent.zip')]

    report = CloneReconciler().reconcile(games, dat)

    assert games[0].clone_of == '99'
    assert report.fixed == []
    assert report.not_in_reference == 1


@pytest.mark.unit
def test_reconcile_parent_missing_locally(write_file):
    dat = _dat(
        write_file,
        '<game name="game" cloneof="parent"><description>Game</description></game>',
    )
    games = [_game('10', 'game.zip')]

    report = CloneReconciler().reconcile(games, dat)

    assert games[0].clone_of == '0'
    assert report.parent_missing == 1


@pytest.mark.unit
def test_reconcile_never_links_game_to_itself(write_file, caplog):
    dat = _dat(
        write_file,
        '<game name="selfref" cloneof="selfref"><description>Self</description></game>',
    )
    games = [_game('50', 'selfref.zip')]

    report = CloneReconciler().reconcile(games, dat)

    assert games[0].clone_of == '0'
    assert report.inconsistent == ['50']
    assert report.fixed == []
    assert "cloneof can't equal romid" in caplog.text


@pytest.mark.unit
def test_reconcile_duplicate_rom_id_reported_inconsistent(write_file):
    dat = _dat(
        write_file,
        '<game name="game" cloneof="parent"><description>Game</description></game>',
    )
    games = [_game('10', 'game.zip'), _game('10', 'parent.zip')]

    report = CloneReconciler().reconcile(games, dat)

    assert all(g.clone_of != g.rom_id for g in games)
    assert report.inconsistent == ['10']
