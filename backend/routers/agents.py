from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from authentication.deps import require_admin
from db.deps import get_db
from models.agent_payloads import AgentCreate, AgentUpdate
from routers.http_errors import to_http_exception
from services import agent_service
from services.errors import ListDistributionError

router = APIRouter(
    prefix="/agents",
    tags=["agents"],
    dependencies=[Depends(require_admin)],
)


@router.post("", status_code=status.HTTP_201_CREATED)
def create_agent(payload: AgentCreate, db: Session = Depends(get_db)):
    try:
        agent = agent_service.create_agent(db, payload)
    except ListDistributionError as exc:
        raise to_http_exception(exc)
    return agent_service.serialize_agent(agent)


@router.get("")
def list_agents(db: Session = Depends(get_db)):
    return [agent_service.serialize_agent(a) for a in agent_service.list_agents(db)]


@router.get("/count/active")
def count_active_agents(db: Session = Depends(get_db)):
    return {"activeAgents": agent_service.count_active_agents(db)}


@router.get("/{agent_id}")
def get_agent(agent_id: str, db: Session = Depends(get_db)):
    try:
        agent = agent_service.get_agent(db, agent_id)
    except ListDistributionError as exc:
        raise to_http_exception(exc)
    return agent_service.serialize_agent(agent)


@router.put("/{agent_id}")
def update_agent(agent_id: str, payload: AgentUpdate, db: Session = Depends(get_db)):
    try:
        agent = agent_service.update_agent(db, agent_id, payload)
    except ListDistributionError as exc:
        raise to_http_exception(exc)
    return agent_service.serialize_agent(agent)


@router.delete("/{agent_id}")
def delete_agent(agent_id: str, db: Session = Depends(get_db)):
    try:
        agent_service.delete_agent(db, agent_id)
    except ListDistributionError as exc:
        raise to_http_exception(exc)
    return {"deleted": True, "id": agent_id}
