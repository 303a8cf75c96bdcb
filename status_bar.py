import os
import time


def render_status(context, width):
    """
    context keys: status_msg, status_until, reading, file_path, modified,
                  read_only, line, total_lines, percent
    """
    text = ""
    now = time.time()
    if context.get('status_msg') and now < context.get('status_until', 0):
        text = f" {context['status_msg']}"
    else:
        mode = 'READ' if context.get('reading') else 'EDIT'
        fname = context.get('file_path') or '[scratch]'
        if context.get('file_path'):
            fname = os.path.basename(fname)
        if context.get('modified'):
            fname += '*'
        if context.get('read_only'):
            fname += ' [ro]'
        line = context.get('line', 1)
        total_lines = context.get('total_lines', 1)
        percent = context.get('percent', 0)
        text = f" {mode} | {fname} | line {line}/{total_lines} | {percent}%"

    return text.ljust(width)[:width]


def render_title(file_path, width):
    name = os.path.basename(file_path) if file_path else '[scratch]'
    menu = "Ctrl+R read  Ctrl+S save  Ctrl+O outline  Ctrl+X quit"
    text = f" lectern | {name}"
    gap = width - len(text) - len(menu) - 1
    if gap > 1:
        text = text + " " * gap + menu
    return text.ljust(width)[:width]
