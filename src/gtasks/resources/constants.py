"""Constants for the Google Tasks API resources."""

DEFAULT_TASK_LIST_ID = '@default'

# Paging
MAX_RESULTS_LIMIT = 100

# Task status values
TASK_STATUS_NEEDS_ACTION = 'needsAction'
TASK_STATUS_COMPLETED = 'completed'

# URL templates, relative to the configured base URL
TASKLISTS_PATH = '/users/@me/lists'
TASKLIST_PATH = '/users/@me/lists/{tasklist_id}'
TASKS_PATH = '/lists/{tasklist_id}/tasks'
TASK_PATH = '/lists/{tasklist_id}/tasks/{task_id}'
TASK_MOVE_PATH = '/lists/{tasklist_id}/tasks/{task_id}/move'
TASKS_CLEAR_PATH = '/lists/{tasklist_id}/clear'
