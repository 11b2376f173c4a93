"""
/todo 过程接口：createToDo / getItems / updateCompletion / deleteItem

路由只做入参解析和响应映射，校验、归属、错误语义全部在 TodoService。
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from todo_app.db.engine import get_db
from todo_app.security.auth import AuthenticatedUser, get_current_user
from todo_app.todo.schemas import (
    CreateTodoRequest,
    DeleteItemRequest,
    DeleteItemResponse,
    ErrorResponse,
    TodoItem,
    TodoRecord,
    UpdateCompletionRequest,
)
from todo_app.todo.service import TodoService

_error_responses = {
    401: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    422: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}

router = APIRouter(prefix="/todo", tags=["待办"], responses=_error_responses)


async def get_todo_service(
    db: AsyncSession = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
) -> TodoService:
    """FastAPI 依赖注入：按请求构造绑定了登录用户的 TodoService"""
    return TodoService(db, user)


@router.post("/createToDo", response_model=TodoRecord)
async def create_todo(
    body: CreateTodoRequest,
    service: TodoService = Depends(get_todo_service),
):
    """新建 Todo，归属人取自登录态"""
    todo = await service.create(
        text=body.text,
        is_completed=body.is_completed,
        category_id=body.category_id,
    )
    return TodoRecord.model_validate(todo)


@router.get("/getItems", response_model=list[TodoItem])
async def get_items(service: TodoService = Depends(get_todo_service)):
    """当前用户的 Todo 列表，按创建时间升序"""
    return await service.list_items()


@router.post("/updateCompletion", response_model=TodoRecord)
async def update_completion(
    body: UpdateCompletionRequest,
    service: TodoService = Depends(get_todo_service),
):
    todo = await service.update_completion(body.id, body.is_completed)
    return TodoRecord.model_validate(todo)


@router.post("/deleteItem", response_model=DeleteItemResponse)
async def delete_item(
    body: DeleteItemRequest,
    service: TodoService = Depends(get_todo_service),
):
    await service.delete(body.id)
    return DeleteItemResponse(id=body.id)
