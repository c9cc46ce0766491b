import pytest
from lxml import etree

from ssgamelist.gamelist.errors import WriteError
from ssgamelist.gamelist.game import CompanyRef, Game, Genre, LocalizedText, Media
from ssgamelist.gamelist.schema import Format
from ssgamelist.gamelist.xml_writer import GameListWriter


@pytest.fixture
def sonic():
    return Game(
        id='1001',
        rom_id='10',
        source='ScreenScraper.fr',
        path='sonic.zip',
        names=[LocalizedText('us', 'Sonic the Hedgehog'), LocalizedText('wor', 'Sonic')],
        synopses=[LocalizedText('en', 'Fast.'), LocalizedText('fr', 'Rapide.')],
        genres=[Genre('en', 'Platform', id='7', main='1'), Genre('fr', 'Plateforme', id='7', main='1')],
        dates=[LocalizedText('wor', '1991')],
        system=CompanyRef('1', 'Megadrive'),
        developer=CompanyRef('5', 'Sonic Team'),
        editor=CompanyRef('6', 'Sega'),
        players='1',
        rating='16',
        medias=[
            Media(type='mixrbv2', region='ss', format='png', url='http://x/y.png'),
            Media(type='box-3D', region='ss', format='png', url='local/already.png'),
            Media(type='video', region='ss', format='mp4', url='http://x/v.mp4'),
            Media(type='ss', region='wor', format='png', url='http://x/ss.png'),
        ],
    )


@pytest.mark.unit
def test_native_writer_structure(tmp_path, sonic):
    out = tmp_path / 'out' / 'gamelist.xml'

    GameListWriter(Format.NATIVE, 'fr').write([sonic], out)

    root = etree.parse(str(out)).getroot()
    assert root.tag == 'Data'
    jeu = root.find('jeux/jeu')
    assert jeu.get('romid') == '10'
    assert jeu.findtext('path') == 'sonic.zip'
    assert jeu.findtext('cloneof') == '0'
    assert [n.get('region') for n in jeu.findall('noms/nom')] == ['us', 'wor']
    assert jeu.find('systeme').get('id') == '1'
    # Language scoped fields
    assert [s.text for s in jeu.findall('synopsis/synopsis')] == ['Rapide.']
    assert [g.text for g in jeu.findall('genres/genre')] == ['Plateforme']
    assert jeu.find('genres/genre').get('principale') == '1'
    assert jeu.findtext('editeur') == 'Sega'
    assert jeu.findtext('note') == '16'


@pytest.mark.unit
def test_native_writer_media_allowlist_and_rewrite(sonic):
    root = GameListWriter(Format.NATIVE).build_document([sonic])

    medias = root.findall('jeux/jeu/medias/media')
    assert [m.get('type') for m in medias] == ['mixrbv2', 'box-3D', 'video']
    assert medias[0].text == 'media/mixrbv2/sonic.png'
    assert medias[1].text == 'local/already.png'
    assert medias[2].text == 'media/video/sonic.mp4'


@pytest.mark.unit
def test_native_writer_omits_system_without_id():
    root = GameListWriter(Format.NATIVE).build_document([Game(system=CompanyRef('', 'Nes'))])

    systeme = root.find('jeux/jeu/systeme')
    assert systeme.get('id') is None
    assert systeme.text is None


@pytest.mark.unit
def test_frontend_writer(sonic):
    root = GameListWriter(Format.FRONTEND, 'en').build_document([sonic])

    assert root.tag == 'gameList'
    assert root.find('jeux') is None
    game = root.find('game')
    assert game.get('id') == '1001'
    assert game.get('source') == 'ScreenScraper.fr'
    assert game.findtext('name') == 'Sonic'
    assert game.findtext('desc') == 'Fast.'
    assert game.findtext('releasedate') == '1991'
    assert game.findtext('publisher') == 'Sega'
    assert game.findtext('developer') == 'Sonic Team'
    assert game.findtext('genre') == 'Platform'
    assert game.findtext('image') == 'media/mixrbv2/sonic.png'
    assert game.findtext('thumbnail') == 'local/already.png'
    assert game.findtext('video') == 'media/video/sonic.mp4'


@pytest.mark.unit
def test_frontend_writer_skips_missing_media():
    root = GameListWriter(Format.FRONTEND).build_document([Game(path='a.zip')])

    game = root.find('game')
    assert game.find('image') is None
    assert game.find('thumbnail') is None
    assert game.find('video') is None


@pytest.mark.unit
def test_write_to_unwritable_destination_raises(tmp_path, sonic):
    blocker = tmp_path / 'file'
    blocker.write_text('not a directory')

    with pytest.raises(WriteError):
        GameListWriter().write([sonic], blocker / 'gamelist.xml')


@pytest.mark.unit
def test_unserializable_text_raises_write_error():
    game = Game(path='bad\x00.zip')

    with pytest.raises(WriteError):
        GameListWriter().build_document([game])
