from __future__ import annotations

# Response keys with a dedicated field on a record.
# Anything else on a song response ends up in Song.tags.

FILE = "file"
LAST_MODIFIED = "Last-Modified"
NAME = "Name"
TIME = "Time"
RANGE = "Range"
ID = "Id"
POS = "Pos"
PRIO = "Prio"

PLAYLIST = "playlist"

ARTISTS = "artists"
ALBUMS = "albums"
SONGS = "songs"
UPTIME = "uptime"
PLAYTIME = "playtime"
DB_PLAYTIME = "db_playtime"
DB_UPDATE = "db_update"

# Lines terminating a command response.
OK = "OK"
LIST_OK = "list_OK"
ACK = "ACK"
