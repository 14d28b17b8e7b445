"""
FastAPI dependencies shared by route handlers.
"""

from fastapi import Request

from api.graph import GraphDatabase


def get_graph_db(request: Request) -> GraphDatabase:
    """
    Returns the graph database owned by the running application.

    Example usage in a route:
        @router.get("/db/status")
        async def db_status(db: GraphDatabase = Depends(get_graph_db)):
            db.run_query("RETURN 1")
    """
    return request.app.state.graph_db
