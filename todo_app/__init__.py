"""
todo-app：带登录态的待办服务（FastAPI + SQLAlchemy）与配套控制台客户端
"""
