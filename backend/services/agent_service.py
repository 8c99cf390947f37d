import logging

from sqlalchemy.orm import Session

from authentication.security import hash_password
from models.agent import Agent
from models.agent_payloads import AgentCreate, AgentUpdate
from services.errors import AgentNotFound, DuplicateAgentEmail

logger = logging.getLogger(__name__)


def _normalize_email(email: str) -> str:
    return email.strip().lower()


def serialize_agent(agent: Agent) -> dict:
    return {
        "id": agent.id,
        "name": agent.name,
        "email": agent.email,
        "mobile": {
            "countryCode": agent.country_code,
            "number": agent.mobile_number,
        },
        "isActive": bool(agent.is_active),
        "createdAt": agent.created_at.isoformat() if agent.created_at else None,
        "updatedAt": agent.updated_at.isoformat() if agent.updated_at else None,
    }


def get_agent_by_email(db: Session, email: str) -> Agent | None:
    return db.query(Agent).filter(Agent.email == _normalize_email(email)).first()


def get_agent(db: Session, agent_id: str) -> Agent:
    agent = db.get(Agent, agent_id)
    if agent is None:
        raise AgentNotFound(agent_id)
    return agent


def list_agents(db: Session) -> list[Agent]:
    return db.query(Agent).order_by(Agent.created_at.desc(), Agent.id.desc()).all()


def get_active_agents(db: Session) -> list[Agent]:
    """Active agents in a stable order; this order decides who absorbs the remainder."""
    return (
        db.query(Agent)
        .filter(Agent.is_active.is_(True))
        .order_by(Agent.created_at.asc(), Agent.id.asc())
        .all()
    )


def count_active_agents(db: Session) -> int:
    return db.query(Agent).filter(Agent.is_active.is_(True)).count()


def create_agent(db: Session, payload: AgentCreate) -> Agent:
    email = _normalize_email(payload.email)
    if get_agent_by_email(db, email) is not None:
        raise DuplicateAgentEmail(email)

    agent = Agent(
        name=payload.name,
        email=email,
        country_code=payload.countryCode,
        mobile_number=payload.mobileNumber,
        password_hash=hash_password(payload.password),
        is_active=True,
    )
    db.add(agent)
    db.commit()
    db.refresh(agent)
    logger.info("AGENT CREATED: id=%s email=%s", agent.id, agent.email)
    return agent


def update_agent(db: Session, agent_id: str, payload: AgentUpdate) -> Agent:
    agent = get_agent(db, agent_id)

    if payload.email is not None:
        email = _normalize_email(payload.email)
        if email != agent.email:
            if get_agent_by_email(db, email) is not None:
                raise DuplicateAgentEmail(email)
            agent.email = email

    if payload.name is not None:
        agent.name = payload.name
    if payload.countryCode is not None:
        agent.country_code = payload.countryCode
    if payload.mobileNumber is not None:
        agent.mobile_number = payload.mobileNumber
    if payload.isActive is not None:
        agent.is_active = payload.isActive

    db.commit()
    db.refresh(agent)
    return agent


def delete_agent(db: Session, agent_id: str) -> None:
    # assigned list items are kept; summaries skip them
    agent = get_agent(db, agent_id)
    db.delete(agent)
    db.commit()
    logger.info("AGENT DELETED: id=%s", agent_id)
