from __future__ import annotations

DEFAULT_MAX_TWEET_LENGTH = 250
MAX_TWEET_LENGTH_KEY = "maxTweetLength"

SENTENCE_TERMINATORS = ".!?"

THREADS_DIRNAME = "TwitterThreads"
STATE_DIRNAME = ".tweetthread"
LOGS_DIRNAME = "logs"
SETTINGS_FILE = "settings.json"
LOG_FILE = "tweetthread.log"

NOTE_EXT = ".md"
UNKNOWN_SOURCE_NAME = "Unknown File"
THREAD_DIVIDER = "\n\n---\n\n"

COMMAND_ID = "create-twitter-thread"
COMMAND_NAME = "Convert note to Twitter thread"
SUCCESS_NOTICE = "Twitter thread created!"
EMPTY_NOTICE = "Nothing to convert"
