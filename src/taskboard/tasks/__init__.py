"""
Task subsystem.

Components:
- task_models.py: data structures (Task, Category, TaskFilters, TaskForm, TaskState)
- transitions.py: pure state transitions used by the task store
- task_store.py: task list / selected task / filters with async actions
- category_store.py: memoized category list
"""
