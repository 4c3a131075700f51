"""M3U8 tags and live window sizes."""

FORMAT_TAG = "#EXTM3U"
END_LIST_TAG = "#EXT-X-ENDLIST"
DISCONTINUITY_TAG = "#EXT-X-DISCONTINUITY"
SEGMENT_TAG = "#EXTINF"

# Header names, these are stored without the leading '#'
MEDIA_SEQUENCE_HEADER = "EXT-X-MEDIA-SEQUENCE"
TARGET_DURATION_HEADER = "EXT-X-TARGETDURATION"

LIVE_WINDOW_SIZE = 12  # Entries kept after a continuity merge
SWITCH_TAIL_SIZE = 4  # Trailing segments taken from a new source

CONTENT_TYPE = "application/x-mpegURL"
