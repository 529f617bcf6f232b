"""Tests for player-facing endpoints."""

from uuid import UUID, uuid4

from fastapi.testclient import TestClient

from team_wrapped.api.app import create_app
from team_wrapped.containers import AppContainer
from team_wrapped.domain.participants import Participant
from tests.conftest import InMemoryParticipantRepository


def _login(client: TestClient, participant: Participant) -> None:
    response = client.post("/api/auth/login", json={"email": participant.email})
    assert response.status_code == 200


def test_login_sets_session_cookie(
    container: AppContainer,
    participant_repository: InMemoryParticipantRepository,
) -> None:
    ana = participant_repository.add("Ana", photo_url=None)
    client = TestClient(create_app(container))

    response = client.post("/api/auth/login", json={"email": " ANA@example.com "})

    assert response.status_code == 200
    data = response.json()
    assert data["participant"]["id"] == str(ana.id)
    assert data["needs_registration"] is True
    assert "session" in response.cookies
    assert client.get("/api/auth/me").json()["email"] == "ana@example.com"


def test_login_rejects_unknown_email(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.post("/api/auth/login", json={"email": "who@example.com"})

    assert response.status_code == 404
    assert "error" in response.json()


def test_login_requires_email(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.post("/api/auth/login", json={})

    assert response.status_code == 400


def test_game_requires_session(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    assert client.get("/api/game/session").status_code == 401
    assert client.post("/api/game/submit").status_code == 401


def test_logout_clears_session(
    container: AppContainer,
    participant_repository: InMemoryParticipantRepository,
) -> None:
    ana = participant_repository.add("Ana")
    client = TestClient(create_app(container))
    _login(client, ana)

    client.post("/api/auth/logout")

    assert client.get("/api/auth/me").status_code == 401


def test_profile_update_completes_registration(
    container: AppContainer,
    participant_repository: InMemoryParticipantRepository,
) -> None:
    ana = participant_repository.add("Ana", photo_url=None)
    client = TestClient(create_app(container))
    _login(client, ana)

    upload = client.post(
        "/api/upload", files={"file": ("me.png", b"png-bytes", "image/png")}
    )
    assert upload.status_code == 200
    url = upload.json()["url"]

    response = client.put("/api/participants", json={"photo_url": url})

    assert response.status_code == 200
    assert participant_repository.get(ana.id).photo_url == url
    assert client.get("/api/auth/me").json()["needs_registration"] is False


def test_upload_rejects_non_images(
    container: AppContainer,
    participant_repository: InMemoryParticipantRepository,
) -> None:
    ana = participant_repository.add("Ana")
    client = TestClient(create_app(container))
    _login(client, ana)

    response = client.post(
        "/api/upload", files={"file": ("notes.txt", b"hello", "text/plain")}
    )

    assert response.status_code == 400


def test_participant_list_hides_artists(
    container: AppContainer,
    participant_repository: InMemoryParticipantRepository,
) -> None:
    ana = participant_repository.add("Ana")
    participant_repository.add("Bruno", photo_url=None)
    client = TestClient(create_app(container))
    _login(client, ana)

    eligible = client.get("/api/participants").json()
    everyone = client.get("/api/participants", params={"all": "true"}).json()

    assert [p["name"] for p in eligible["participants"]] == ["Ana"]
    assert "artist_1" not in eligible["participants"][0]
    assert len(everyone["participants"]) == 2
    assert everyone["registration_status"]["missing_photo"] == 1


def test_waiting_room_until_everyone_registers(
    container: AppContainer,
    participant_repository: InMemoryParticipantRepository,
) -> None:
    ana = participant_repository.add("Ana")
    participant_repository.add("Bruno", photo_url=None)
    client = TestClient(create_app(container))
    _login(client, ana)

    response = client.get("/api/game/session")

    assert response.status_code == 403
    assert response.json()["registration_status"]["total"] == 2


def test_full_game_flow(
    container: AppContainer,
    participant_repository: InMemoryParticipantRepository,
) -> None:
    ana = participant_repository.add("Ana")
    bruno = participant_repository.add("Bruno")
    carla = participant_repository.add("Carla")
    client = TestClient(create_app(container))
    _login(client, ana)

    board = client.get("/api/game/session").json()
    assert board["total_cards"] == 2
    assert board["is_completed"] is False
    assert {card["id"] for card in board["cards"]} == {str(bruno.id), str(carla.id)}
    assert str(ana.id) not in {p["id"] for p in board["participants"]}

    first, second = board["cards"]
    guess = client.post(
        "/api/game/guess",
        json={
            "card_participant_id": first["id"],
            "guessed_participant_id": first["id"],
            "card_index": first["index"],
        },
    )
    assert guess.status_code == 200

    early = client.post("/api/game/submit")
    assert early.status_code == 400
    assert early.json()["missing"] == 1

    client.post(
        "/api/game/guess",
        json={
            "card_participant_id": second["id"],
            "guessed_participant_id": first["id"],
            "card_index": second["index"],
        },
    )
    submitted = client.post("/api/game/submit")
    assert submitted.json() == {"success": True, "message": "Game submitted"}

    again = client.post("/api/game/submit")
    assert again.status_code == 400
    assert again.json()["error"] == "Game already submitted"

    reloaded = client.get("/api/game/session").json()
    assert reloaded["session_id"] == board["session_id"]
    assert reloaded["is_completed"] is True
    assert reloaded["guesses"][first["id"]] == first["id"]
    assert reloaded["correct_answers"] == {}


def test_null_guess_removes_card_answer(
    container: AppContainer,
    participant_repository: InMemoryParticipantRepository,
) -> None:
    ana = participant_repository.add("Ana")
    bruno = participant_repository.add("Bruno")
    client = TestClient(create_app(container))
    _login(client, ana)
    client.get("/api/game/session")
    client.post(
        "/api/game/guess",
        json={
            "card_participant_id": str(bruno.id),
            "guessed_participant_id": str(bruno.id),
            "card_index": 0,
        },
    )

    response = client.post(
        "/api/game/guess",
        json={
            "card_participant_id": str(bruno.id),
            "guessed_participant_id": None,
            "card_index": 0,
        },
    )

    assert response.json() == {"success": True, "removed": True}
    assert client.get("/api/game/session").json()["guesses"] == {}


def test_invalid_guess_payload_is_rejected(
    container: AppContainer,
    participant_repository: InMemoryParticipantRepository,
) -> None:
    ana = participant_repository.add("Ana")
    participant_repository.add("Bruno")
    client = TestClient(create_app(container))
    _login(client, ana)
    client.get("/api/game/session")

    response = client.post(
        "/api/game/guess",
        json={"card_participant_id": "not-a-uuid", "card_index": 0},
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid data"}


def test_guess_before_session_is_not_found(
    container: AppContainer,
    participant_repository: InMemoryParticipantRepository,
) -> None:
    ana = participant_repository.add("Ana")
    bruno = participant_repository.add("Bruno")
    client = TestClient(create_app(container))
    _login(client, ana)

    response = client.post(
        "/api/game/guess",
        json={
            "card_participant_id": str(bruno.id),
            "guessed_participant_id": str(bruno.id),
            "card_index": 0,
        },
    )

    assert response.status_code == 404


def test_guess_naming_unknown_participant_is_not_found(
    container: AppContainer,
    participant_repository: InMemoryParticipantRepository,
) -> None:
    ana = participant_repository.add("Ana")
    bruno = participant_repository.add("Bruno")
    client = TestClient(create_app(container))
    _login(client, ana)
    session_id = client.get("/api/game/session").json()["session_id"]

    response = client.post(
        "/api/game/guess",
        json={
            "card_participant_id": str(bruno.id),
            "guessed_participant_id": str(uuid4()),
            "card_index": 0,
        },
    )

    assert response.status_code == 404
    assert response.json() == {"error": "Participant not found"}
    assert container.game_service.list_guesses(UUID(session_id)) == []
