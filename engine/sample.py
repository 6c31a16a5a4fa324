"""
engine/sample.py — Sample metadata designed to trigger multiple findings.

Expected result: 6 HIGH and 5 MEDIUM findings, raw deduction 170, score 20.
"""

SAMPLE_METADATA = {
    "tables": [
        {
            "name": "users",
            "columns": [
                {"name": "id", "type": "integer", "primaryKey": True},
                # MEDIUM: email nullable
                {"name": "email", "type": "text", "nullable": True},
                # not flagged: only "email" and "title" are checked
                {"name": "name", "type": "text", "nullable": True},
            ],
        },
        {
            "name": "posts",
            "columns": [
                # HIGH: posts table has no primary key
                {"name": "id", "type": "integer"},
                # MEDIUM: title nullable
                {"name": "title", "type": "text", "nullable": True},
                # HIGH: user_id without foreignKey
                {"name": "user_id", "type": "integer"},
            ],
        },
        {
            "name": "comments",
            "columns": [
                {"name": "id", "type": "integer", "primaryKey": True},
                {"name": "content", "type": "text"},
                # HIGH: foreignKey to a missing table (typo)
                {"name": "post_id", "type": "integer",
                 "foreignKey": {"table": "post", "column": "id"}},
            ],
        },
    ],
    "authRules": [
        # HIGH: POST without auth
        {"endpoint": "/users", "method": "POST", "requiresAuth": False, "rolesAllowed": []},
        # HIGH: requiresAuth but no roles
        {"endpoint": "/users", "method": "GET", "requiresAuth": True, "rolesAllowed": []},
        # MEDIUM: DELETE allows "user"
        {"endpoint": "/users", "method": "DELETE", "requiresAuth": True, "rolesAllowed": ["user"]},
        {"endpoint": "/posts", "method": "GET", "requiresAuth": False, "rolesAllowed": []},
        # HIGH: PATCH without auth
        {"endpoint": "/posts", "method": "PATCH", "requiresAuth": False, "rolesAllowed": []},
    ],
    "functions": [
        # MEDIUM: destructive, and no rule anywhere mentions "admin"
        {"name": "cleanup_old_data", "isDestructive": True},
        # MEDIUM
        {"name": "purge_deleted_users", "trigger": "cron", "isDestructive": True,
         "touchesTables": ["users"]},
    ],
}
