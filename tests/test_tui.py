import asyncio

from stopwatch_hil.tui import StopwatchApp

def test_keys_drive_the_stopwatch(sw, clock):
    app = StopwatchApp(sw, refresh_interval=0.01)

    async def drive():
        async with app.run_test() as pilot:
            await pilot.press('l')
            assert sw.laps == ()
            await pilot.press('space')
            assert sw.running
            clock.advance(1_234)
            await pilot.press('l')
            await pilot.press('space')
            assert not sw.running
            await pilot.pause()
            assert app.elapsed_text == '00:00:01.234'
            assert [lap.offset_ms for lap in sw.laps] == [1_234]
            await pilot.press('r')
            assert sw.laps == ()
            assert app.elapsed_text == '00:00:00.000'

    asyncio.run(drive())
