CSS_LOG = """
/* Base styles */
.content {
    font-family: monospace;
    margin: 1em;
}

.section {
    margin-top: 1em;
    padding: 1em;
    background: #2d2d2d;
    color: #e0e0e0;
    border-radius: 4px;
}

.info { color: #e0e0e0; }
.debug { color: #9e9e9e; }
.warning { color: #ffcc66; }

.error {
    margin: 1em 0;
    padding: 1em;
    background: #331f1f;
    color: #ff8080;
    border-radius: 4px;
}

.result strong {
    color: #80c0ff;
}

.tree-view {
    white-space: pre;
}
"""

HTML_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>{title}</title>
<style>
{css}
</style>
</head>
<body>
{body}
</body>
</html>
"""
