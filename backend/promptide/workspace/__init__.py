"""
Workspace core: the Project model and everything derived from it.

    from promptide.workspace.session import WorkspaceSession

    session = WorkspaceSession(store=FileStoreClient(), classifier=TemplateClassifier())
    await session.mount()
    await session.submit_prompt("build a landing page")
"""
