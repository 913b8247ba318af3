GAME_ID = "starsector"

MOD_INFO_FILE = "mod_info.json"
VERSION_CHECKER_FILE_EXT = ".version"

# Setting this attribute to "unknown" makes the host show its
# "open in browser" action for a mod with no known file id.
NEWEST_FILE_ID = "newestFileId"
UNKNOWN_FILE_ID = "unknown"
