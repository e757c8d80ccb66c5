from aniex.models.server import Server


def test_dashboard_stats(admin_client, db, sample_episodes, sample_movie):
    db.add_all([
        Server(name="Main", number=1, status="online"),
        Server(name="Backup", number=2, status="offline"),
    ])
    db.commit()

    response = admin_client.get("/api/admin/stats")
    assert response.status_code == 200

    body = response.json()
    assert body["totalAnime"] == 1
    assert body["totalMovies"] == 1
    assert body["totalEpisodes"] == 3
    assert body["totalServers"] == 2
    assert body["onlineServers"] == 1
    assert body["totalUsers"] == 1
    assert [a["title"] for a in body["recentAnime"]] == ["Frieren"]
    assert len(body["recentEpisodes"]) == 3
