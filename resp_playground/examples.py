EXAMPLES = {
    "GET key": {
        "description": """
        ## 📖 GET

        **Syntax:** `GET key`

        **On the wire:** a 2 element array. `GET` is 3 bytes, `mykey` is 5,
        so the request is `*2`, `$3 GET`, `$5 mykey`.
        """,
        "command": "GET mykey"
    },

    "SET key value": {
        "description": """
        ## 💾 SET

        **Syntax:** `SET key value`

        **On the wire:** every argument, value included, is sent as a bulk
        string. Numbers are not special: `SET counter 10` sends `$2 10`.
        """,
        "command": "SET mykey Hello"
    },

    "HSET hash field value": {
        "description": """
        ## 🗂️ HSET

        **Syntax:** `HSET key field value [field value ...]`

        **On the wire:** the array length grows by two for each extra
        field/value pair.
        """,
        "command": "HSET user:1 name Alice"
    },

    "LPUSH list value": {
        "description": """
        ## ⬅️ LPUSH

        **Syntax:** `LPUSH key element [element ...]`

        **On the wire:** keys like `queue` and values like `task1` are both
        plain bulk strings; the server decides what they mean.
        """,
        "command": "LPUSH queue task1"
    },

    "ZADD sorted_set score member": {
        "description": """
        ## 🏆 ZADD

        **Syntax:** `ZADD key score member [score member ...]`

        **On the wire:** the score `100` travels as the 3 byte bulk string
        `100`, not as a RESP integer. Clients never send `:` frames.
        """,
        "command": "ZADD leaderboard 100 player1"
    },
}

# Replies a server could send back, shown in the decode tab
SAMPLE_REPLIES = {
    "Simple string": "+OK\\r\\n",
    "Error": "-ERR unknown command 'FOO'\\r\\n",
    "Integer": ":1000\\r\\n",
    "Bulk string": "$5\\r\\nHello\\r\\n",
    "Null bulk string": "$-1\\r\\n",
    "Array": "*2\\r\\n$3\\r\\nfoo\\r\\n:42\\r\\n",
    "Null array": "*-1\\r\\n",
    "Truncated": "$5\\r\\nHel",
}

DEFAULT_EXAMPLE = "SET key value"
