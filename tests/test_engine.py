import logging
import math

import numpy as np
import pytest

from asciiflow.physics.engine import FrameClock, RenderState, SimulationEngine
from asciiflow.physics.modes import FluidConfig, Mode
from asciiflow.physics.scheduling import SteppingScheduler

TEXT = "The quick brown fox jumps over the lazy dog 0123456789 {}[]"


def speeds(engine):
    return np.hypot(engine.particles.velocities[:, 0], engine.particles.velocities[:, 1])


def run_ticks(engine, n):
    for k in range(n):
        engine.tick(k * 16.0)


def test_particle_count_is_reported_once():
    counts = []
    engine = SimulationEngine("a b\nc", Mode.FLUID, 300, 200, seed=1, on_particle_count=counts.append)
    assert counts == [3]
    assert engine.particle_count == 3
    assert engine.particles.characters == ['a', 'b', 'c']


@pytest.mark.parametrize("mode", ['fluid', 'weather', 'swarm'])
def test_wrap_modes_keep_particles_inside_and_slow(mode):
    engine = SimulationEngine(TEXT, mode, 300, 200, seed=7)
    limit = engine.force.max_velocity
    for k in range(150):
        engine.tick(k * 16.0)
        pos = engine.particles.positions
        assert np.all((pos[:, 0] >= 0) & (pos[:, 0] < 300))
        assert np.all((pos[:, 1] >= 0) & (pos[:, 1] < 200))
        assert np.all(speeds(engine) <= limit + 1e-9)


def test_fluid_bounce_mode_keeps_particles_on_surface():
    engine = SimulationEngine(TEXT, 'fluid', 120, 80, seed=2,
                              mode_config=FluidConfig(boundary_mode='bounce'))
    for _ in range(200):
        engine.tick(0.0)
        pos = engine.particles.positions
        assert np.all((pos[:, 0] >= 0) & (pos[:, 0] <= 120))
        assert np.all((pos[:, 1] >= 0) & (pos[:, 1] <= 80))
        assert np.all(speeds(engine) <= 3.0 + 1e-9)


def test_mass_and_norm_never_change():
    engine = SimulationEngine(TEXT, 'swarm', 300, 200, seed=3)
    norm = engine.particles.norm.copy()
    mass = engine.particles.mass.copy()
    run_ticks(engine, 50)
    np.testing.assert_array_equal(engine.particles.norm, norm)
    np.testing.assert_array_equal(engine.particles.mass, mass)


def test_fluid_similar_pair_moves_closer():
    engine = SimulationEngine("AB", 'fluid', 400, 300, seed=3,
                              mode_config=FluidConfig(friction=1.0, neighbors_to_check=32))
    engine.particles.positions[:] = [[100.0, 100.0], [110.0, 100.0]]
    engine.particles.velocities[:] = 0.0
    engine.tick(0.0)
    vel = engine.particles.velocities
    assert vel[0, 0] > 0
    assert vel[1, 0] < 0
    pos = engine.particles.positions
    assert pos[1, 0] - pos[0, 0] < 10.0


def test_gravity_falls_faster_until_floor_bounce():
    engine = SimulationEngine("A", 'gravity', 200, 400, seed=0)
    engine.particles.positions[:] = [[100.0, 100.0]]
    engine.particles.velocities[:] = 0.0

    previous = 0.0
    for _ in range(200):
        engine.tick(0.0)
        y, vy = engine.particles.positions[0, 1], engine.particles.velocities[0, 1]
        if y >= 390.0:
            assert y == 390.0
            assert vy < 0
            break
        assert vy > previous
        previous = vy
    else:
        pytest.fail("particle never reached the floor")


def test_gravity_rest_snap_on_floor():
    engine = SimulationEngine("A", 'gravity', 200, 400, seed=0)
    engine.particles.positions[:] = [[100.0, 389.9]]
    engine.particles.velocities[:] = [[0.0, 0.3]]
    engine.tick(0.0)
    assert engine.particles.positions[0, 1] == 390.0
    assert engine.particles.velocities[0, 1] == 0.0


def test_gravity_speed_and_floor_bounds():
    engine = SimulationEngine(TEXT, 'gravity', 300, 200, seed=4)
    for _ in range(300):
        engine.tick(0.0)
        assert np.all(engine.particles.positions[:, 1] <= 190.0)
        assert np.all(speeds(engine) <= 60.0 + 1e-9)


def test_chaos_never_settles():
    engine = SimulationEngine("chaos never rests!", 'chaos', 400, 300, seed=5)
    engine.particles.velocities[:] = 0.0
    energy = []
    for _ in range(400):
        engine.tick(0.0)
        pos = engine.particles.positions
        assert np.all((pos[:, 0] >= 0) & (pos[:, 0] <= 400))
        assert np.all((pos[:, 1] >= 0) & (pos[:, 1] <= 300))
        # wall hits may push a particle past the clamp until its next step
        assert np.all(speeds(engine) <= 6.0)
        energy.append(engine.mean_squared_speed())
    assert max(energy[-100:]) > 0.01


def test_weather_vortices_advance_with_no_particles():
    from asciiflow.physics.vortex import Vortex

    engine = SimulationEngine("", 'weather', 100, 100, seed=0)
    assert len(engine.vortex_field) == 3
    engine.vortex_field.vortices[:] = [Vortex(1.0, 50.0, -2.0, 0.5, 0.08, 1)]
    engine.tick(0.0)
    v = engine.vortex_field.vortices[0]
    assert (v.x, v.y, v.vx, v.vy) == pytest.approx((0.0, 50.5, 2.0, 0.5))
    engine.tick(16.0)
    assert (v.x, v.y) == pytest.approx((2.0, 51.0))


def test_same_seed_same_run():
    a = SimulationEngine(TEXT, 'weather', 300, 200, seed=11)
    b = SimulationEngine(TEXT, 'weather', 300, 200, seed=11)
    run_ticks(a, 30)
    run_ticks(b, 30)
    np.testing.assert_array_equal(a.particles.positions, b.particles.positions)
    assert [(v.x, v.y) for v in a.vortex_field] == [(v.x, v.y) for v in b.vortex_field]


@pytest.mark.parametrize("mode", list(Mode))
def test_empty_text_in_every_mode(mode):
    engine = SimulationEngine("  \n\t ", mode, 300, 200, seed=0)
    run_ticks(engine, 5)
    assert engine.particle_count == 0
    assert engine.render_states() == []
    assert engine.mean_squared_speed() == 0.0


@pytest.mark.parametrize("mode", list(Mode))
def test_degenerate_surface_stays_finite(mode):
    engine = SimulationEngine("abc", mode, 0, 0, seed=1)
    run_ticks(engine, 20)
    assert np.all(np.isfinite(engine.particles.positions))
    assert np.all(np.isfinite(engine.particles.velocities))


def test_invalid_mode_and_config():
    with pytest.raises(ValueError):
        SimulationEngine("abc", 'plasma')
    with pytest.raises(TypeError):
        SimulationEngine("abc", 'swarm', mode_config=FluidConfig())


def test_resize_changes_boundaries():
    engine = SimulationEngine(TEXT, 'fluid', 500, 400, seed=6)
    engine.resize(50, 40)
    engine.tick(0.0)
    pos = engine.particles.positions
    assert np.all((pos[:, 0] >= 0) & (pos[:, 0] < 50))
    assert np.all((pos[:, 1] >= 0) & (pos[:, 1] < 40))
    assert (engine.width, engine.height) == (50.0, 40.0)


def test_render_states():
    engine = SimulationEngine("~ A", 'fluid', 300, 200, seed=0)
    states = engine.render_states()
    assert [s.character for s in states] == ['~', 'A']
    assert all(isinstance(s, RenderState) for s in states)
    assert states[0].alpha == pytest.approx(1.0)
    assert states[0].hue == pytest.approx(360.0)
    assert states[1].x == engine.particles.positions[1, 0]


def test_creation_is_logged(caplog):
    with caplog.at_level(logging.INFO, logger="asciiflow"):
        SimulationEngine("hi", 'chaos', 300, 200, seed=0)
    assert "Engine created: mode=chaos particles=2" in caplog.text


# --- frame clock and scheduling -------------------------------------------

def test_frame_clock_carries_remainder():
    clock = FrameClock(50, start_ms=0.0)
    assert not clock.ready(10.0)
    assert clock.ready(20.0)
    assert clock.ready(45.0)
    assert clock.last_ms == 40.0
    assert not clock.ready(59.0)
    assert clock.ready(60.0)


def test_frame_clock_at_60fps_does_not_drift():
    clock = FrameClock(60, start_ms=0.0)
    ticks = sum(clock.ready(k * (1000.0 / 60)) for k in range(1, 61))
    assert ticks == 60


@pytest.mark.parametrize("fps", [0, -5])
def test_frame_clock_rejects_bad_rate(fps):
    with pytest.raises(ValueError):
        FrameClock(fps)


def scheduled_engine(scheduler, **kwargs):
    return SimulationEngine(TEXT, 'swarm', 300, 200, seed=0,
                            clock=FrameClock(50, start_ms=scheduler.now_ms),
                            request_tick=scheduler.request_tick,
                            cancel_tick=scheduler.cancel_tick, **kwargs)


def test_one_tick_per_frame():
    frames = []
    scheduler = SteppingScheduler(frame_ms=20.0)
    engine = scheduled_engine(scheduler, on_frame=frames.append)
    engine.start()
    assert scheduler.run(10) == 10
    assert engine.tick_count == 10
    assert frames == [engine] * 10
    assert scheduler.pending == 1


def test_fast_host_timer_is_throttled():
    scheduler = SteppingScheduler(frame_ms=5.0)
    engine = scheduled_engine(scheduler)
    engine.start()
    scheduler.run(40)
    # 200 ms at 50 fps
    assert engine.tick_count == 10


def test_start_twice_keeps_one_pending_request():
    scheduler = SteppingScheduler(frame_ms=20.0)
    engine = scheduled_engine(scheduler)
    engine.start()
    engine.start()
    assert scheduler.pending == 1


def test_dispose_cancels_pending_tick():
    scheduler = SteppingScheduler(frame_ms=20.0)
    engine = scheduled_engine(scheduler)
    engine.start()
    scheduler.run(3)
    engine.dispose()
    assert scheduler.pending == 0
    assert engine.disposed
    assert engine.particles is None
    assert engine.render_states() == []
    assert scheduler.run(5) == 0
    assert engine.tick_count == 3
    engine.dispose()


def test_stale_callback_after_dispose_is_ignored():
    callbacks = []

    def request_tick(callback):
        callbacks.append(callback)
        return len(callbacks)

    engine = SimulationEngine(TEXT, 'weather', 300, 200, seed=0,
                              clock=FrameClock(50, start_ms=0.0), request_tick=request_tick)
    engine.start()
    engine.dispose()
    callbacks[0](1000.0)
    assert engine.tick_count == 0
    assert len(callbacks) == 1
    assert engine.vortex_field is None


def test_start_needs_scheduler_and_live_engine():
    with pytest.raises(RuntimeError):
        SimulationEngine("abc", seed=0).start()
    scheduler = SteppingScheduler()
    engine = scheduled_engine(scheduler)
    engine.dispose()
    with pytest.raises(RuntimeError):
        engine.start()


def test_tick_after_dispose_is_noop():
    engine = SimulationEngine("abc", 'gravity', seed=0)
    engine.dispose()
    engine.tick(0.0)
    assert engine.tick_count == 0
    assert math.isclose(engine.mean_squared_speed(), 0.0)
