from gui.widgets.image_grid import ImageGrid


def test_new_results_cancel_previous_thumbnail_downloads(qapp, image_loader, results_factory):
    grid = ImageGrid(image_loader, columns=2)
    grid.set_results(results_factory(3))
    first_batch = list(image_loader.tasks)
    assert [task.url for task in first_batch] == [f"https://cdn.example/{i}_640.jpg" for i in range(3)]
    assert not any(task.cancelled for task in first_batch)

    grid.set_results(results_factory(2, start=100))

    assert all(task.cancelled for task in first_batch)
    assert not any(task.cancelled for task in image_loader.tasks[3:])
    assert grid.count == 2


def test_append_keeps_downloads_running(qapp, image_loader, results_factory):
    grid = ImageGrid(image_loader, columns=3)
    grid.set_results(results_factory(2))
    grid.append_results(results_factory(2, start=2))

    assert grid.count == 4
    assert len(image_loader.tasks) == 4
    assert not any(task.cancelled for task in image_loader.tasks)
