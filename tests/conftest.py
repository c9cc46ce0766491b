"""
Shared pytest fixtures and utilities for the ssgamelist test suite.
"""

from pathlib import Path
from typing import Callable, Dict, Any

import pytest
import yaml


NATIVE_GAMELIST = """<?xml version="1.0" encoding="UTF-8"?>
<Data>
  <jeux>
    <jeu id="1001" romid="10" notgame="false">
      <path>sonic.zip</path>
      <noms>
        <nom region="us">Sonic the Hedgehog</nom>
        <nom region="wor">Sonic</nom>
      </noms>
      <regions>
        <region>us</region>
        <region>eu</region>
      </regions>
      <cloneof>0</cloneof>
      <systeme id="1">Megadrive</systeme>
      <synopsis>
        <synopsis langue="en">Fast blue hedgehog.</synopsis>
        <synopsis langue="fr">Herisson bleu rapide.</synopsis>
      </synopsis>
      <medias>
        <media parent="jeu" type="mixrbv2" region="ss" crc="aa" md5="bb" sha1="cc" format="png" support="">http://x/y.png</media>
        <media parent="jeu" type="box-3D" region="ss" crc="" md5="" sha1="" format="png" support="">local/already.png</media>
        <media parent="jeu" type="video" region="ss" crc="" md5="" sha1="" format="mp4" support="">http://x/v.mp4</media>
        <media parent="jeu" type="ss" region="wor" crc="" md5="" sha1="" format="png" support="">http://x/ss.png</media>
      </medias>
      <dates>
        <date region="us">1991-06-23</date>
        <date region="wor">1991</date>
      </dates>
      <developpeur id="5">Sonic Team</developpeur>
      <editeur id="6">Sega</editeur>
      <genres>
        <genre id="7" principale="1" parentid="0" langue="en">Platform</genre>
        <genre id="7" principale="1" parentid="0" langue="fr">Plateforme</genre>
      </genres>
      <joueurs>1</joueurs>
      <topstaff>1</topstaff>
      <note>16</note>
      <rotation>0</rotation>
      <resolution>320x224</resolution>
      <controles>joystick</controles>
      <couleurs>512</couleurs>
    </jeu>
    <jeu id="2001" romid="20" notgame="false">
      <path>parent.zip</path>
      <noms>
        <nom region="wor">Alpha Parent</nom>
      </noms>
      <cloneof>0</cloneof>
      <systeme id="75">Arcade</systeme>
      <dates>
        <date region="wor">1992</date>
      </dates>
      <developpeur id="8">Capcom</developpeur>
      <editeur id="8">Capcom</editeur>
      <genres>
        <genre id="10" principale="1" parentid="0" langue="en">Fighting</genre>
      </genres>
      <joueurs>2</joueurs>
      <topstaff>0</topstaff>
      <note>14</note>
      <rotation>0</rotation>
      <resolution>384x224</resolution>
    </jeu>
    <jeu id="3001" romid="30" notgame="false">
      <path>game.zip</path>
      <noms>
        <nom region="wor">Zeta Game</nom>
      </noms>
      <cloneof>0</cloneof>
      <systeme id="75">Arcade</systeme>
      <dates>
        <date region="wor">1992</date>
      </dates>
      <developpeur id="8">Capcom</developpeur>
      <editeur id="8">Capcom</editeur>
      <genres>
        <genre id="10" principale="1" parentid="0" langue="en">Fighting</genre>
      </genres>
      <joueurs>2</joueurs>
      <topstaff>0</topstaff>
      <note>12</note>
      <rotation>270</rotation>
      <resolution>224x384</resolution>
    </jeu>
    <jeu id="4001" romid="40" notgame="false">
      <path>clone.zip</path>
      <noms>
        <nom region="wor">Beta Clone</nom>
      </noms>
      <cloneof>20</cloneof>
      <systeme id="75">Arcade</systeme>
      <developpeur id="8">Capcom</developpeur>
      <editeur id="8">Capcom</editeur>
      <joueurs>2</joueurs>
      <topstaff>0</topstaff>
      <note>14</note>
      <rotation>0</rotation>
      <resolution>384x224</resolution>
    </jeu>
  </jeux>
</Data>
"""

FRONTEND_GAMELIST = """<?xml version="1.0" encoding="UTF-8"?>
<gameList>
  <game id="1001" source="ScreenScraper.fr">
    <path>sonic.zip</path>
    <name>Sonic</name>
    <desc>Fast blue hedgehog.</desc>
    <rating>0.8</rating>
    <releasedate>19910623T000000</releasedate>
    <developer>Sonic Team</developer>
    <publisher>Sega</publisher>
    <genre>Platform</genre>
    <players>1</players>
    <image>media/mixrbv2/sonic.png</image>
    <video>media/video/sonic.mp4</video>
  </game>
  <game id="2001" source="ScreenScraper.fr">
    <path>alpha.zip</path>
    <name>Alpha</name>
    <players>2</players>
  </game>
</gameList>
"""

REFERENCE_DAT = """<?xml version="1.0"?>
<!DOCTYPE datafile PUBLIC "-//FB Alpha//DTD ROM Management Datafile//EN" "http://www.logiqx.com/Dats/datafile.dtd">
<datafile>
  <header>
    <name>FinalBurn Neo - Arcade Games</name>
  </header>
  <game name="parent">
    <description>Alpha Parent</description>
  </game>
  <game name="game" cloneof="parent" romof="parent">
    <description>Zeta Game (clone)</description>
  </game>
  <game name="clone" cloneof="parent" romof="parent">
    <description>Beta Clone</description>
  </game>
  <game name="orphan" cloneof="missingparent">
    <description>Orphan</description>
  </game>
</datafile>
"""


@pytest.fixture
def project_root() -> Path:
    """
    Repository root path.
    """
    return Path(__file__).resolve().parent.parent


@pytest.fixture
def write_file(tmp_path: Path) -> Callable[[str, str], Path]:
    """
    Write text content into the temp workspace.

    Usage:
        path = write_file("gamelist.xml", "<Data/>")
    """

    def _writer(name: str, content: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding='utf-8')
        return path

    return _writer


@pytest.fixture
def native_gamelist(write_file) -> Path:
    """Native (ScreenScraper) gamelist with four games, one clone."""
    return write_file("gamelist.xml", NATIVE_GAMELIST)


@pytest.fixture
def frontend_gamelist(write_file) -> Path:
    """Frontend (EmulationStation) gamelist with two games."""
    return write_file("es_gamelist.xml", FRONTEND_GAMELIST)


@pytest.fixture
def reference_dat(write_file) -> Path:
    """FinalBurn-style reference dat."""
    return write_file("fbneo.dat", REFERENCE_DAT)


@pytest.fixture
def rom_dir(tmp_path: Path) -> Path:
    """ROM directory holding a subset of the native gamelist's ROMs."""
    roms = tmp_path / "roms"
    roms.mkdir()
    for name in ("sonic.zip", "parent.zip", "notinlist.zip", "readme.txt"):
        (roms / name).write_bytes(b"PK\x03\x04")
    return roms


@pytest.fixture
def make_config(tmp_path: Path) -> Callable[[Dict[str, Any]], Path]:
    """
    Create a ssgamelist.yaml in a temp directory.

    Usage:
        path = make_config({"export": {"format": "frontend"}})
    """

    def _builder(values: Dict[str, Any] | None = None) -> Path:
        cfg_path = tmp_path / "ssgamelist.yaml"
        cfg_path.write_text(yaml.safe_dump(values or {}))
        return cfg_path

    return _builder
